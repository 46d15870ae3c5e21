import pytest

from gaugelog.exceptions import InvalidStyleError
from gaugelog.styles import BEEP, RESET, Style, render


def test_color_disabled_returns_text() -> None:
    assert render("text", {"fg": "red", "bold": True}, False) == "text"


def test_foreground_color() -> None:
    assert render("info", {"fg": "green"}, True) == "\x1b[32minfo\x1b[0m"


def test_empty_style_still_resets_with_color() -> None:
    assert render("plain", None, True) == "plain" + RESET


def test_beep_follows_start_sequence() -> None:
    assert render("x", {"fg": "red", "beep": True}, True) == "\x1b[31m" + BEEP + "x" + RESET
    assert render("x", {"beep": True}, True) == BEEP + "x" + RESET


def test_grey_and_camel_case_names() -> None:
    assert render("g", {"fg": "grey"}, True) == "\x1b[90mg\x1b[0m"
    assert render("r", {"fg": "brightRed"}, True) == "\x1b[91mr\x1b[0m"


def test_coerce() -> None:
    assert Style.coerce(None) == Style()
    style = Style(fg="red")
    assert Style.coerce(style) is style
    assert Style.coerce({"fg": "red", "bold": True}) == Style(fg="red", bold=True)


def test_to_dict_drops_unset_fields() -> None:
    assert Style(fg="cyan", bg="black").to_dict() == {"fg": "cyan", "bg": "black"}


@pytest.mark.parametrize(
    "descriptor",
    [
        {"fg": "chartreuse-ish"},
        {"bg": "nope"},
        {"colour": "red"},
        "red",
    ],
)
def test_invalid_styles(descriptor) -> None:
    with pytest.raises(InvalidStyleError):
        Style.coerce(descriptor)
