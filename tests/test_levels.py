import math

import pytest

from gaugelog.exceptions import InvalidStyleError
from gaugelog.levels import LevelTable
from gaugelog.styles import Style


def test_default_levels_in_priority_order() -> None:
    table = LevelTable()
    assert table.names() == [
        "silly",
        "verbose",
        "info",
        "timing",
        "http",
        "notice",
        "warn",
        "error",
        "silent",
    ]


def test_default_labels_and_styles() -> None:
    table = LevelTable()
    assert table["silly"].label == "sill"
    assert table["verbose"].label == "verb"
    assert table["warn"].label == "WARN"
    assert table["error"].label == "ERR!"
    assert table["info"].label == "info"
    assert table["warn"].style == Style(fg="black", bg="yellow")
    assert table["silent"].style == Style()


def test_sentinel_priorities() -> None:
    table = LevelTable()
    assert table.priority("silly") == -math.inf
    assert table["silent"].is_silent
    assert not table["silly"].is_silent
    assert not table["error"].is_silent


def test_add_registers_with_name_as_default_label() -> None:
    table = LevelTable(defaults=False)
    level = table.add("custom", 1500, {"fg": "blue"})
    assert level.label == "custom"
    assert level.style == Style(fg="blue")
    assert "custom" in table
    assert len(table) == 1


def test_add_overwrites_existing_level() -> None:
    table = LevelTable()
    table.add("info", 2100, {"fg": "blue"}, "INFO")
    assert table.priority("info") == 2100
    assert table["info"].label == "INFO"
    assert len(table) == 9


def test_unknown_level_lookup() -> None:
    table = LevelTable()
    assert table.get("bogus") is None
    assert table.priority("bogus") is None
    assert "bogus" not in table


def test_add_rejects_bad_style() -> None:
    table = LevelTable(defaults=False)
    with pytest.raises(InvalidStyleError):
        table.add("bad", 1, {"fg": "not-a-color"})
    assert "bad" not in table
