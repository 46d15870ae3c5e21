"""
Style Registry

Maps semantic style descriptors (fg/bg/bold/underline/inverse/beep) to
terminal output. Rendering is a pure function of the descriptor and whether
color is enabled; the SGR sequences themselves come from rich.
"""

import re
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Union

from rich.color import ColorParseError, ColorSystem
from rich.style import Style as RichStyle

from gaugelog.exceptions import InvalidStyleError

BEEP = "\x07"
RESET = "\x1b[0m"

# Console color names that rich spells differently
_COLOR_ALIASES = {
    "grey": "bright_black",
    "gray": "bright_black",
}

_CAMEL_RE = re.compile(r"(?<=[a-z])([A-Z])")


@dataclass(frozen=True)
class Style:
    """Semantic style descriptor for a fragment of log output."""
    fg: Optional[str] = None
    bg: Optional[str] = None
    bold: bool = False
    underline: bool = False
    inverse: bool = False
    beep: bool = False

    @classmethod
    def coerce(cls, value: Union["Style", Mapping[str, Any], None]) -> "Style":
        """
        Build a Style from a descriptor.

        Accepts an existing Style, a mapping such as {"fg": "red", "bold": True},
        or None for the empty style.

        Raises:
            InvalidStyleError: If the mapping has unknown keys or bad colors
        """
        if value is None:
            style = cls()
        elif isinstance(value, Style):
            style = value
        elif isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = set(value) - known
            if unknown:
                raise InvalidStyleError(
                    f"Unknown style keys: {', '.join(sorted(unknown))}"
                )
            style = cls(**dict(value))
        else:
            raise InvalidStyleError(f"Cannot build a style from {value!r}")

        # Fail at registration time rather than on first write
        to_rich_style(style)
        return style

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


def _color_name(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    name = _CAMEL_RE.sub(r"_\1", name).lower()
    return _COLOR_ALIASES.get(name, name)


@lru_cache(maxsize=256)
def to_rich_style(style: Style) -> RichStyle:
    """Convert a descriptor to a rich Style (cached, descriptors are frozen)."""
    try:
        return RichStyle(
            color=_color_name(style.fg),
            bgcolor=_color_name(style.bg),
            bold=style.bold or None,
            underline=style.underline or None,
            reverse=style.inverse or None,
        )
    except ColorParseError as e:
        raise InvalidStyleError(str(e)) from e


def render(text: str, style: Union[Style, Mapping[str, Any], None], use_color: bool) -> str:
    """
    Render text with a style descriptor.

    Args:
        text: Text fragment to render
        style: Style descriptor (Style, mapping or None)
        use_color: When False the text is returned unchanged

    Returns:
        Start sequence, BEL when beeping, the text, then a reset; the reset
        is written even for an empty style whenever color is enabled
    """
    if not use_color:
        return text

    style = Style.coerce(style)
    body = BEEP + text if style.beep else text
    output = to_rich_style(style).render(body, color_system=ColorSystem.STANDARD)
    if not output.endswith(RESET):
        output += RESET
    return output
