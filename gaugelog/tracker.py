"""
Progress Tracking Hierarchy

Nested completion tracking. Items count units of work, streams count the
length of data passing through them, and groups aggregate their children
by weight. Every change emits a "change" event (name, completed, tracker)
that bubbles up through parent groups.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Dict, Iterable, Iterator, List, Optional

from gaugelog.events import EventEmitter

logger = logging.getLogger(__name__)

CHANGE_EVENT = "change"

_ids = itertools.count(1)


def _base(unit: Any) -> Any:
    """The tracker itself when unit is a wrapper exposing unwrap()."""
    unwrap = getattr(type(unit), "unwrap", None)
    return unit.unwrap() if callable(unwrap) else unit


class TrackerBase(EventEmitter, ABC):
    """Common identity and naming for trackers."""

    def __init__(self, name: str = "") -> None:
        super().__init__()
        self.id = next(_ids)
        self.name = name
        self.parent_group: Optional["TrackerGroup"] = None
        self._lock = RLock()

    @abstractmethod
    def completed(self) -> float:
        """Fraction of work done, from 0 to 1."""
        pass

    @abstractmethod
    def finish(self) -> None:
        """Mark all work as done."""
        pass

    def name_in_tree(self) -> str:
        """Slash-separated path of names from the root group."""
        names = []
        tracker: Optional[TrackerBase] = self
        while tracker is not None:
            names.insert(0, tracker.name)
            tracker = tracker.parent_group
        return "/".join(names)

    def _changed(self, name: Optional[str] = None) -> None:
        self.emit(CHANGE_EVENT, name or self.name, self.completed(), self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, completed={self.completed():.3f})"


class Tracker(TrackerBase):
    """Counts completed units of work against a total."""

    def __init__(self, name: str = "", todo: float = 0) -> None:
        super().__init__(name)
        self.work_done: float = 0
        self.work_todo: float = todo

    def completed(self) -> float:
        with self._lock:
            if self.work_todo == 0:
                return 0.0
            return self.work_done / self.work_todo

    def add_work(self, work: float) -> None:
        with self._lock:
            self.work_todo += work
        self._changed()

    def complete_work(self, work: float) -> None:
        with self._lock:
            self.work_done = min(self.work_done + work, self.work_todo)
        self._changed()

    def finish(self) -> None:
        with self._lock:
            self.work_todo = self.work_done = 1
        self._changed()


class TrackerStream(TrackerBase):
    """
    Tracks data flowing from a source.

    Iterating the stream (or calling read() on a file-like source)
    completes one unit of work per character/byte, or one per chunk for
    chunks without a length.
    """

    def __init__(self, name: str = "", size: float = 0, source: Any = None) -> None:
        super().__init__(name)
        self._tracker = Tracker(name, size)
        self._tracker.on(CHANGE_EVENT, self._relay)
        self.source = source

    def _relay(self, name: str, completed: float, tracker: Tracker) -> None:
        self.emit(CHANGE_EVENT, name, completed, self)

    @staticmethod
    def _work_for(chunk: Any) -> int:
        try:
            return len(chunk) or 1
        except TypeError:
            return 1

    def completed(self) -> float:
        return self._tracker.completed()

    def add_work(self, work: float) -> None:
        self._tracker.add_work(work)

    def complete_work(self, work: float) -> None:
        self._tracker.complete_work(work)

    def finish(self) -> None:
        self._tracker.finish()

    def wrap(self, iterable: Iterable[Any]) -> Iterator[Any]:
        """Yield from an iterable, completing work for each chunk."""
        for chunk in iterable:
            self.complete_work(self._work_for(chunk))
            yield chunk

    def __iter__(self) -> Iterator[Any]:
        if self.source is None:
            return iter(())
        return self.wrap(self.source)

    def read(self, size: int = -1) -> Any:
        """Read from a file-like source, completing work for what was read."""
        if self.source is None:
            raise ValueError(f"TrackerStream {self.name!r} has no source to read from")
        data = self.source.read(size)
        if data:
            self.complete_work(len(data))
        return data


class TrackerGroup(TrackerBase):
    """
    Weighted aggregate of child trackers.

    A child's share of the group is its weight over the total weight.
    Changes in any descendant are re-emitted as changes of the group.
    """

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self.trackers: List[TrackerBase] = []
        self._completion: Dict[int, float] = {}
        self._weight: Dict[int, float] = {}
        self._total_weight: float = 0
        self.finished = False

    def _bubble_change(self, name: str, completed: float, tracker: TrackerBase) -> None:
        with self._lock:
            self._completion[tracker.id] = completed
            if self.finished:
                return
        self.emit(CHANGE_EVENT, name or self.name, self.completed(), self)

    def add_unit(self, unit: Any, weight: float = 1) -> Any:
        """
        Add a child tracker.

        Args:
            unit: Tracker, TrackerStream or TrackerGroup
            weight: Relative share of this group's completion

        Returns:
            The added unit

        Raises:
            ValueError: If adding a group would create a cycle
        """
        inner = _base(unit)
        if isinstance(inner, TrackerGroup):
            group: Optional[TrackerBase] = self
            while group is not None:
                if group is inner:
                    raise ValueError("Attempt to add a group to itself or one of its descendants")
                group = group.parent_group
        inner.parent_group = self

        with self._lock:
            self._weight[unit.id] = weight
            self._total_weight += weight
            self.trackers.append(unit)
            self._completion[unit.id] = unit.completed()

        unit.on(CHANGE_EVENT, self._bubble_change)
        if not self.finished:
            self.emit(CHANGE_EVENT, unit.name, self._completion[unit.id], unit)
        return unit

    def completed(self) -> float:
        with self._lock:
            if not self.trackers or self._total_weight == 0:
                return 0.0
            value_per_weight = 1 / self._total_weight
            return sum(
                value_per_weight * self._weight[tracker.id] * self._completion[tracker.id]
                for tracker in self.trackers
            )

    def new_group(self, name: str = "", weight: float = 1) -> "TrackerGroup":
        return self.add_unit(TrackerGroup(name), weight)

    def new_item(self, name: str = "", todo: float = 0, weight: float = 1) -> Tracker:
        return self.add_unit(Tracker(name, todo), weight)

    def new_stream(self, name: str = "", todo: float = 0, weight: float = 1, source: Any = None) -> TrackerStream:
        return self.add_unit(TrackerStream(name, todo, source), weight)

    def finish(self) -> None:
        with self._lock:
            self.finished = True
            empty = not self.trackers
        if empty:
            self.add_unit(Tracker(), 1)
        for tracker in list(self.trackers):
            tracker.finish()
        self._changed()

    def debug(self, depth: str = "") -> str:
        """Indented dump of the tree with each node's completion."""
        output = f"{depth}{self.name or 'top'}: {self.completed()}\n"
        for tracker in self.trackers:
            if isinstance(_base(tracker), TrackerGroup):
                output += tracker.debug(depth + "  ")
            else:
                output += f"{depth}  {tracker.name}: {tracker.completed()}\n"
        return output
