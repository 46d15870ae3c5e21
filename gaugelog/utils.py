"""
Common Utilities

Small helpers shared across the package with no gaugelog dependencies.
Kept minimal to avoid circular imports.
"""

import asyncio
import logging
import re
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split on LF or CRLF only; a trailing break yields a trailing empty line."""
    return _LINE_BREAK.split(text)


def first_line(text: str) -> str:
    return split_lines(text)[0]


def defer(callback: Optional[Callable[[], None]]) -> None:
    """
    Run a callback on the next tick.

    Inside a running asyncio loop the callback is scheduled with
    call_soon(); otherwise there is no loop to defer to and it is invoked
    right away, after the caller has finished its own state changes.
    """
    if callback is None:
        return

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        loop.call_soon(callback)
        return

    callback()
