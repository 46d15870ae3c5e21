import io

import pytest

from gaugelog.tracker import Tracker, TrackerBase, TrackerGroup, TrackerStream


def test_base_tracker_is_abstract() -> None:
    with pytest.raises(TypeError):
        TrackerBase("bare")


def test_tracker_completion() -> None:
    item = Tracker("item", 10)
    assert item.completed() == 0
    item.complete_work(4)
    assert item.completed() == pytest.approx(0.4)
    item.add_work(10)
    assert item.completed() == pytest.approx(0.2)


def test_tracker_without_work_is_zero() -> None:
    assert Tracker("empty").completed() == 0


def test_complete_work_is_capped() -> None:
    item = Tracker("item", 2)
    item.complete_work(5)
    assert item.completed() == 1


def test_finish() -> None:
    item = Tracker("item", 0)
    item.finish()
    assert item.completed() == 1


def test_change_events() -> None:
    item = Tracker("item", 2)
    events = []
    item.on("change", lambda name, completed, tracker: events.append((name, completed, tracker)))
    item.complete_work(1)
    assert events == [("item", 0.5, item)]


def test_group_weighted_completion() -> None:
    group = TrackerGroup()
    a = group.new_item("a", 10, weight=1)
    b = group.new_item("b", 10, weight=3)

    a.complete_work(10)
    assert group.completed() == pytest.approx(0.25)
    b.complete_work(5)
    assert group.completed() == pytest.approx(0.625)


def test_changes_bubble_to_root() -> None:
    root = TrackerGroup("root")
    child = root.new_group("child")
    leaf = child.new_item("leaf", 4)

    events = []
    root.on("change", lambda name, completed, tracker: events.append((name, completed)))
    leaf.complete_work(2)

    assert events == [("leaf", pytest.approx(0.5))]


def test_add_unit_emits_change() -> None:
    group = TrackerGroup("g")
    events = []
    group.on("change", lambda name, completed, tracker: events.append(name))
    group.new_item("new")
    assert events == ["new"]


def test_cycles_are_rejected() -> None:
    root = TrackerGroup("root")
    child = root.new_group("child")
    with pytest.raises(ValueError):
        root.add_unit(root)
    with pytest.raises(ValueError):
        child.add_unit(root)


def test_group_finish() -> None:
    group = TrackerGroup()
    group.new_item("a", 10)
    group.new_item("b", 10)
    group.finish()
    assert group.completed() == 1
    assert group.finished


def test_empty_group_finish() -> None:
    group = TrackerGroup()
    assert group.completed() == 0
    group.finish()
    assert group.completed() == 1


def test_name_in_tree() -> None:
    root = TrackerGroup("root")
    leaf = root.new_group("child").new_item("leaf")
    assert leaf.name_in_tree() == "root/child/leaf"


def test_debug_dump() -> None:
    group = TrackerGroup()
    group.new_item("a", 10).complete_work(10)
    group.new_item("b", 10, weight=3)
    assert group.debug() == "top: 0.25\n  a: 1.0\n  b: 0.0\n"


def test_stream_counts_iterated_chunks() -> None:
    stream = TrackerStream("data", 6, source=["abc", "def"])
    assert list(stream) == ["abc", "def"]
    assert stream.completed() == 1


def test_stream_wrap() -> None:
    stream = TrackerStream("data", 4)
    chunks = list(stream.wrap([b"ab", b"cd"]))
    assert chunks == [b"ab", b"cd"]
    assert stream.completed() == 1


def test_stream_read() -> None:
    stream = TrackerStream("file", 5, source=io.StringIO("hello"))
    assert stream.read(2) == "he"
    assert stream.completed() == pytest.approx(0.4)


def test_stream_read_without_source() -> None:
    with pytest.raises(ValueError):
        TrackerStream("none", 1).read()


def test_stream_changes_bubble() -> None:
    group = TrackerGroup()
    stream = group.new_stream("s", 4)
    events = []
    group.on("change", lambda name, completed, tracker: events.append((name, completed)))
    stream.complete_work(1)
    assert events == [("s", pytest.approx(0.25))]
