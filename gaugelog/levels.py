"""
Level Table

Ordered registry of named severity levels. Each level carries a numeric
priority used for filtering, a style used for its label, and the label
itself. Levels can be added at runtime; they are never removed.
"""

import logging
import math
from dataclasses import dataclass
from threading import RLock
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from gaugelog.styles import Style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Level:
    """A named severity."""
    name: str
    priority: float
    style: Style = Style()
    label: str = ""

    @property
    def is_silent(self) -> bool:
        """True for the positive-infinity sentinel that is never shown."""
        return self.priority > 0 and math.isinf(self.priority)


StyleLike = Union[Style, Mapping[str, Any], None]

# (name, priority, style, label)
DEFAULT_LEVELS = (
    ("silly", -math.inf, {"inverse": True}, "sill"),
    ("verbose", 1000, {"fg": "cyan", "bg": "black"}, "verb"),
    ("info", 2000, {"fg": "green"}, None),
    ("timing", 2500, {"fg": "green", "bg": "black"}, None),
    ("http", 3000, {"fg": "green", "bg": "black"}, None),
    ("notice", 3500, {"fg": "cyan", "bg": "black"}, None),
    ("warn", 4000, {"fg": "black", "bg": "yellow"}, "WARN"),
    ("error", 5000, {"fg": "red", "bg": "black"}, "ERR!"),
    ("silent", math.inf, None, None),
)


class LevelTable:
    """
    Registry mapping level names to Level entries.

    Iteration yields levels in ascending priority order; ties keep
    registration order.
    """

    def __init__(self, defaults: bool = True) -> None:
        self._lock = RLock()
        self._levels: Dict[str, Level] = {}
        if defaults:
            for name, priority, style, label in DEFAULT_LEVELS:
                self.add(name, priority, style, label)

    def add(
        self,
        name: str,
        priority: float,
        style: StyleLike = None,
        label: Optional[str] = None,
    ) -> Level:
        """
        Register or overwrite a level.

        Args:
            name: Level name
            priority: Numeric priority (may be -inf or +inf)
            style: Style descriptor for the label
            label: Display label (defaults to the name)

        Returns:
            The stored Level

        Raises:
            InvalidStyleError: If the style descriptor cannot be rendered
        """
        level = Level(
            name=name,
            priority=priority,
            style=Style.coerce(style),
            label=name if label is None else label,
        )
        with self._lock:
            replaced = name in self._levels
            self._levels[name] = level
        logger.debug(f"{'Updated' if replaced else 'Registered'} level {name} ({priority})")
        return level

    def get(self, name: str) -> Optional[Level]:
        with self._lock:
            return self._levels.get(name)

    def priority(self, name: str) -> Optional[float]:
        """Priority for a level name, or None when it is not registered."""
        level = self.get(name)
        return None if level is None else level.priority

    def names(self) -> List[str]:
        return [level.name for level in self]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._levels

    def __getitem__(self, name: str) -> Level:
        with self._lock:
            return self._levels[name]

    def __iter__(self) -> Iterator[Level]:
        with self._lock:
            levels = list(self._levels.values())
        return iter(sorted(levels, key=lambda level: level.priority))

    def __len__(self) -> int:
        with self._lock:
            return len(self._levels)
