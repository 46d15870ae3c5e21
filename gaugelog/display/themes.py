"""
Gauge Themes

Characters and colors used to draw the progress line, plus the themeset
that picks a theme for a (unicode, color) combination.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional, TextIO, Tuple


@dataclass(frozen=True)
class GaugeTheme:
    """Drawing characters and per-part rich styles for a progress line."""
    name: str
    complete: str
    remaining: str
    activity_frames: Tuple[str, ...]
    pre_bar: str = ""
    post_bar: str = ""
    styles: Mapping[str, str] = field(default_factory=dict)

    def style_for(self, part: str) -> str:
        return self.styles.get(part, "")


_COLOR_STYLES = {
    "bar_complete": "green",
    "bar_remaining": "bright_black",
    "activity_indicator": "cyan",
    "section": "bold",
    "completed": "cyan",
}

ASCII_THEME = GaugeTheme(
    name="ascii",
    complete="#",
    remaining="-",
    activity_frames=("-", "\\", "|", "/"),
    pre_bar="[",
    post_bar="]",
)

UNICODE_THEME = GaugeTheme(
    name="unicode",
    complete="█",
    remaining="░",
    activity_frames=("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"),
)


class Themeset:
    """
    Named themes selected by unicode and color support.

    Keys are "ascii" and "unicode", optionally with a "-color" suffix for
    the colored variant. Lookups fall back from the colored key to the
    plain one, and from unicode to ascii.
    """

    def __init__(self, themes: Mapping[str, GaugeTheme]) -> None:
        if "ascii" not in themes:
            raise ValueError("A themeset needs at least an 'ascii' theme")
        self._themes: Dict[str, GaugeTheme] = dict(themes)

    def get(self, has_unicode: bool, has_color: bool) -> GaugeTheme:
        bases = ["unicode", "ascii"] if has_unicode else ["ascii"]
        for base in bases:
            if has_color and f"{base}-color" in self._themes:
                return self._themes[f"{base}-color"]
            if base in self._themes:
                theme = self._themes[base]
                if has_color:
                    return theme
                return replace(theme, styles={})
        return self._themes["ascii"]

    def names(self):
        return sorted(self._themes)


DEFAULT_THEMESET = Themeset({
    "ascii": ASCII_THEME,
    "ascii-color": replace(ASCII_THEME, name="ascii-color", styles=_COLOR_STYLES),
    "unicode": UNICODE_THEME,
    "unicode-color": replace(UNICODE_THEME, name="unicode-color", styles=_COLOR_STYLES),
})


def detect_unicode(stream: Optional[TextIO]) -> bool:
    """Whether the stream's encoding can carry the unicode theme."""
    encoding = getattr(stream, "encoding", None) if stream is not None else None
    if not encoding:
        return False
    return encoding.lower().replace("-", "").startswith("utf")
