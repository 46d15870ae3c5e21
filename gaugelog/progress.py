"""
Progress Coordinator

Owns the enabled/paused state of the progress display and the protocol
that interleaves it with log output: hide the line before a log write,
redraw it afterwards with the latest record and completion.
"""

import logging
from threading import RLock
from typing import Any, Callable, Dict, Optional, Sequence

from gaugelog.config import LogConfig
from gaugelog.display.base import Gauge
from gaugelog.display.themes import Themeset
from gaugelog.display.template import TemplateItem
from gaugelog.levels import LevelTable
from gaugelog.records import RecordBuffer
from gaugelog.sink import WriteSink
from gaugelog.tracker import CHANGE_EVENT, TrackerGroup
from gaugelog.utils import defer

logger = logging.getLogger(__name__)


class ProgressCoordinator:
    """
    Enable/disable/show/clear protocol for the progress display.

    enable() and disable() are idempotent. While paused the display is
    switched off without touching the enabled flag, so resuming brings it
    back only if it was logically enabled.
    """

    def __init__(
        self,
        gauge: Gauge,
        tracker: TrackerGroup,
        records: RecordBuffer,
        levels: LevelTable,
        sink: WriteSink,
        config: LogConfig,
    ) -> None:
        self._lock = RLock()
        self.gauge = gauge
        self.tracker = tracker
        self._records = records
        self._levels = levels
        self._sink = sink
        self._config = config
        self.enabled = False
        self.paused = False

    # -- enable / disable ------------------------------------------------

    def enable(self) -> None:
        with self._lock:
            if self.enabled or self.paused:
                return
            self.enabled = True
            self.tracker.on(CHANGE_EVENT, self._on_tracker_change)
            self.gauge.enable()
        logger.debug("Progress display enabled")

    def disable(self) -> None:
        with self._lock:
            if not self.enabled:
                return
            self.enabled = False
            self.tracker.off(CHANGE_EVENT, self._on_tracker_change)
            self.gauge.disable()
        logger.debug("Progress display disabled")

    def _on_tracker_change(self, name: Optional[str] = None, completed: Optional[float] = None, *args: Any) -> None:
        self.show(name, completed)

    # -- pause / resume --------------------------------------------------

    def pause(self) -> None:
        """Stop drawing; log output is queued by the caller while paused."""
        with self._lock:
            self.paused = True
            if self.enabled:
                self.gauge.disable()

    def resume(self, replay: Callable[[], None]) -> None:
        """
        Leave the paused state.

        Args:
            replay: Called after the paused flag is cleared and before the
                display comes back, to flush queued output
        """
        with self._lock:
            if not self.paused:
                return
            self.paused = False
            replay()
            if self.enabled:
                self.gauge.enable()

    # -- drawing ---------------------------------------------------------

    def values(self, section: Optional[str] = None, completed: Optional[float] = None) -> Dict[str, Any]:
        """Values for the gauge: section, last record details, completion."""
        values: Dict[str, Any] = {}
        if section:
            values["section"] = section

        last = self._records.last()
        if last is not None:
            values["subsection"] = last.prefix
            level = self._levels.get(last.level)
            if level is not None:
                logline = self._sink.format(level.label, level.style)
            else:
                logline = last.level
            if last.prefix:
                logline += " " + self._sink.format(last.prefix, self._config.prefix_style)
            logline += " " + last.first_line
            values["logline"] = logline

        values["completed"] = completed if completed is not None else self.tracker.completed()
        return values

    def show(self, section: Optional[str] = None, completed: Optional[float] = None) -> None:
        with self._lock:
            if not self.enabled:
                return
            self.gauge.show(self.values(section, completed))

    def clear(self, callback: Optional[Callable[[], None]] = None) -> None:
        with self._lock:
            if not self.enabled:
                defer(callback)
                return
            self.gauge.hide(callback)

    def pulse(self, key: Optional[str] = None) -> None:
        with self._lock:
            if self.enabled:
                self.gauge.pulse(key)

    # -- appearance ------------------------------------------------------

    def set_theme(self, has_color: Optional[bool], has_unicode: Optional[bool]) -> None:
        self.gauge.set_theme(has_color=has_color, has_unicode=has_unicode)

    def set_template(self, template: Sequence[TemplateItem]) -> None:
        self.gauge.set_template(template)

    def set_themeset(self, themeset: Themeset) -> None:
        self.gauge.set_themeset(themeset)

    def set_write_target(self, stream: Any) -> None:
        self.gauge.set_write_target(stream)
