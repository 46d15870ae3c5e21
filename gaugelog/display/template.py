"""
Gauge Templates

A template is a sequence of literal strings and item mappings describing
the progress line, left to right. Item keys:

    type     progressbar | activity_indicator | section | subsection |
             logline | completed
    length   fixed width (bar width for progressbar)
    kerning  spaces placed on both sides when the item has a value
    default  text used when the value is missing

Rendering produces a rich Text; values may contain ANSI styling (the
logline does), which is parsed rather than counted as width.
"""

from typing import Any, Mapping, Optional, Sequence, Union

from rich.text import Text

from gaugelog.display.themes import GaugeTheme

TemplateItem = Union[str, Mapping[str, Any]]

DEFAULT_BAR_LENGTH = 20

ITEM_TYPES = (
    "progressbar",
    "activity_indicator",
    "section",
    "subsection",
    "logline",
    "completed",
)

DEFAULT_TEMPLATE = (
    {"type": "progressbar", "length": DEFAULT_BAR_LENGTH},
    {"type": "activity_indicator", "kerning": 1, "length": 1},
    {"type": "section", "default": ""},
    ":",
    {"type": "logline", "kerning": 1, "default": ""},
)


def validate_template(template: Sequence[TemplateItem]) -> tuple:
    """Check item types up front so a bad template fails on assignment."""
    items = []
    for item in template:
        if not isinstance(item, str):
            item_type = item.get("type")
            if item_type not in ITEM_TYPES:
                raise ValueError(f"Unknown template item type: {item_type!r}")
        items.append(item)
    return tuple(items)


def bar_length(template: Sequence[TemplateItem]) -> int:
    for item in template:
        if not isinstance(item, str) and item.get("type") == "progressbar":
            return int(item.get("length", DEFAULT_BAR_LENGTH))
    return DEFAULT_BAR_LENGTH


def _completed(values: Mapping[str, Any]) -> float:
    try:
        completed = float(values.get("completed") or 0.0)
    except (TypeError, ValueError):
        return 0.0
    return min(max(completed, 0.0), 1.0)


def _progressbar(length: int, completed: float, theme: GaugeTheme) -> Text:
    filled = int(round(length * completed))
    text = Text(theme.pre_bar)
    text.append(theme.complete * filled, style=theme.style_for("bar_complete"))
    text.append(theme.remaining * (length - filled), style=theme.style_for("bar_remaining"))
    text.append(theme.post_bar)
    return text


def _item_text(
    item: Mapping[str, Any],
    values: Mapping[str, Any],
    theme: GaugeTheme,
    frame: int,
) -> Optional[Text]:
    item_type = item["type"]

    if item_type == "progressbar":
        length = int(item.get("length", DEFAULT_BAR_LENGTH))
        return _progressbar(length, _completed(values), theme)

    if item_type == "activity_indicator":
        frames = theme.activity_frames
        glyph = frames[frame % len(frames)] if frames else ""
        return Text(glyph, style=theme.style_for("activity_indicator"))

    if item_type == "completed":
        percent = int(round(_completed(values) * 100))
        return Text(f"{percent:3d}%", style=theme.style_for("completed"))

    value = values.get(item_type)
    if value is None or value == "":
        value = item.get("default", "")
    if not value:
        return None

    text = Text.from_ansi(str(value))
    if theme.style_for(item_type):
        text.stylize(theme.style_for(item_type))
    return text


def render_template(
    template: Sequence[TemplateItem],
    values: Mapping[str, Any],
    theme: GaugeTheme,
    frame: int = 0,
    width: Optional[int] = None,
    include: Optional[Sequence[str]] = None,
) -> Text:
    """
    Render a template into a single line.

    Args:
        template: Template items
        values: Current gauge values (section, subsection, logline, completed)
        theme: Theme providing characters and styles
        frame: Activity indicator frame counter
        width: Crop the line to this many cells
        include: Restrict rendering to these item types (literals always kept)

    Returns:
        Rendered line as rich Text
    """
    line = Text(no_wrap=True, end="")

    for item in template:
        if isinstance(item, str):
            line.append(item)
            continue
        if include is not None and item["type"] not in include:
            continue

        text = _item_text(item, values, theme, frame)
        if text is None:
            continue

        length = item.get("length")
        if length is not None and item["type"] != "progressbar":
            text.truncate(int(length), pad=True)

        kerning = " " * int(item.get("kerning", 0))
        if kerning:
            line.append(kerning)
        line.append_text(text)
        if kerning:
            line.append(kerning)

    if width is not None and width > 0:
        line.truncate(width)
    return line
