"""
Message Formatting

printf-style interpolation for log arguments, plus capture of exception
tracebacks so they lead the formatted message.

Placeholders:
    %s  str()            %d  number          %i  integer
    %f  float            %j  compact JSON    %o, %O  repr()
    %c  consumed, empty  %%  literal percent

Placeholders without a matching argument stay as written; leftover
arguments are appended separated by spaces.
"""

import json
import math
import re
import traceback
from typing import Any, List, Optional, Sequence, Tuple

_PLACEHOLDER = re.compile(r"%[sdifjoOc%]")

NAN = "NaN"


def _describe(value: Any) -> str:
    """Rendering for arguments that are not interpolated into a template."""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseException):
        return _describe_exception(value)
    return repr(value)


def _describe_exception(exc: BaseException) -> str:
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


def _as_string(value: Any) -> str:
    if isinstance(value, BaseException):
        return _describe_exception(value)
    return str(value)


def _as_number(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    try:
        number = float(value)
    except (TypeError, ValueError):
        return NAN
    if math.isnan(number):
        return NAN
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _as_integer(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return NAN
    if math.isnan(number) or math.isinf(number):
        return NAN
    return str(int(number))


def _as_float(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return NAN
    if math.isnan(number):
        return NAN
    return repr(number)


def _as_json(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), default=str)
    except ValueError:
        # json raises ValueError("Circular reference detected")
        return "[Circular]"


_CONVERTERS = {
    "s": _as_string,
    "d": _as_number,
    "i": _as_integer,
    "f": _as_float,
    "j": _as_json,
    "o": repr,
    "O": repr,
    "c": lambda value: "",
}


def format_message(*args: Any) -> str:
    """
    Format log arguments into a single message.

    Args:
        *args: Template followed by values, or plain values

    Returns:
        Formatted message text

    Example:
        >>> format_message("hi %s, %d%% done", "there", 42)
        'hi there, 42% done'
        >>> format_message("count", 3, {"a": 1})
        "count 3 {'a': 1}"
    """
    if not args:
        return ""

    template = args[0]
    if not isinstance(template, str):
        return " ".join(_describe(arg) for arg in args)

    if len(args) == 1:
        return template

    remaining = list(args[1:])

    def substitute(match: "re.Match[str]") -> str:
        token = match.group(0)[1]
        if token == "%":
            return "%"
        if not remaining:
            return match.group(0)
        return _CONVERTERS[token](remaining.pop(0))

    message = _PLACEHOLDER.sub(substitute, template)
    if remaining:
        message = " ".join([message] + [_describe(arg) for arg in remaining])
    return message


def exception_stack(exc: BaseException) -> Optional[str]:
    """
    Traceback text for an exception, normalized onto the exception.

    The first call formats the traceback and stores it on the exception as
    a plain-string ``stack`` attribute; later calls return that string, so
    formatting the same exception again yields the same text.

    Returns:
        Traceback text, or None when the exception carries no traceback
    """
    stack = getattr(exc, "stack", None)
    if isinstance(stack, str):
        return stack

    if exc.__traceback__ is None:
        return None

    stack = "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    ).rstrip("\n")
    try:
        exc.stack = stack
    except AttributeError:
        # Exceptions with __slots__ cannot carry the attribute
        pass
    return stack


def build_message(args: Sequence[Any]) -> Tuple[str, Tuple[Any, ...]]:
    """
    Format log arguments, leading with the traceback of any exception.

    Returns:
        (message, raw_args) where raw_args has the traceback text prepended
        when one was captured
    """
    stack = None
    for arg in args:
        if isinstance(arg, BaseException):
            found = exception_stack(arg)
            if found is not None:
                stack = found

    message = format_message(*args)
    raw: List[Any] = list(args)
    if stack is not None:
        raw.insert(0, stack)
        message = f"{stack}\n{message}"
    return message, tuple(raw)
