"""
Log - Leveled Logger with Progress Display

The central entry point. Log.log() validates the level, formats the
arguments, builds a record, notifies subscribers, keeps the record in the
bounded history and writes it out, hiding and redrawing the progress line
around the write so both share the stream cleanly.
"""

import itertools
import logging
import sys
from contextlib import contextmanager
from threading import RLock
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, TextIO

from gaugelog.config import LogConfig
from gaugelog.display.base import Gauge
from gaugelog.display.registry import create_gauge
from gaugelog.display.template import TemplateItem
from gaugelog.display.themes import Themeset
from gaugelog.events import ERROR_EVENT, EventEmitter
from gaugelog.exceptions import UndefinedLevelError
from gaugelog.formatting import build_message
from gaugelog.handles import LoggingTracker
from gaugelog.levels import DEFAULT_LEVELS, Level, LevelTable, StyleLike
from gaugelog.progress import ProgressCoordinator
from gaugelog.records import LogRecord, PauseBuffer, RecordBuffer
from gaugelog.sink import WriteSink
from gaugelog.styles import Style
from gaugelog.tracker import TrackerGroup
from gaugelog.utils import split_lines

logger = logging.getLogger(__name__)

_DEFAULT_STREAM = object()


def _ignore_error(*args: Any) -> None:
    """Default "error" listener; keeps bad log calls from raising."""
    return None


class Log(EventEmitter):
    """
    Leveled logger coordinating a progress gauge on one output stream.

    Every registered level gets a method, so ``log.info("fetch", "got %d", 3)``
    is ``log.log("info", "fetch", "got %d", 3)``.

    Events:
        "log"          every record
        "log.<level>"  records of that level
        "<prefix>"     records with that prefix (when non-empty)
        "error"        UndefinedLevelError for unknown levels

    A no-op "error" listener is installed so a bad level never raises.
    """

    # Class-level lock for the process-wide instance
    _global_lock = RLock()
    _instance: Optional["Log"] = None

    def __init__(
        self,
        stream: Any = _DEFAULT_STREAM,
        gauge: Optional[Gauge] = None,
        tracker: Optional[TrackerGroup] = None,
        config: Optional[LogConfig] = None,
    ) -> None:
        """
        Initialize a Log.

        Args:
            stream: Output stream (default: sys.stderr; None discards output)
            gauge: Progress display (default: built from config.gauge)
            tracker: Root of the tracking hierarchy (default: new TrackerGroup)
            config: Settings (default: LogConfig())
        """
        super().__init__()
        self._lock = RLock()
        self._level_methods: Dict[str, Callable[..., None]] = {}
        self._ids = itertools.count()

        self.config = config or LogConfig()
        if stream is _DEFAULT_STREAM:
            stream = sys.stderr

        self._sink = WriteSink(stream, self.config)
        self._records = RecordBuffer(self.config.max_record_size)
        self._pause_buffer = PauseBuffer()
        self.levels = LevelTable(defaults=False)

        self.tracker = tracker if tracker is not None else TrackerGroup()
        self.gauge = gauge if gauge is not None else create_gauge(
            self.config.gauge,
            stream,
            has_color=self.config.color,
            has_unicode=self.config.unicode,
            update_interval=self.config.update_interval,
        )
        self._progress = ProgressCoordinator(
            self.gauge, self.tracker, self._records, self.levels, self._sink, self.config
        )

        for name, priority, style, label in DEFAULT_LEVELS:
            self.add_level(name, priority, style, label)

        self.on(ERROR_EVENT, _ignore_error)

    @classmethod
    def get_instance(cls) -> "Log":
        """Get or create the process-wide Log, configured from the environment."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = Log(config=LogConfig.from_env())
                    logger.debug("Created process-wide Log")
        return cls._instance

    # -- level methods ---------------------------------------------------

    def __getattr__(self, name: str) -> Callable[..., None]:
        # Only reached when normal lookup fails
        methods = self.__dict__.get("_level_methods")
        if methods is not None and name in methods:
            return methods[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def _has_attribute(self, name: str) -> bool:
        return (
            hasattr(type(self), name)
            or name in self.__dict__
            or name in self._level_methods
        )

    def add_level(
        self,
        name: str,
        priority: float,
        style: StyleLike = None,
        label: Optional[str] = None,
    ) -> Level:
        """
        Register or update a level.

        A method named after the level is created unless something by that
        name already exists on the Log; re-registering keeps the existing
        method and only updates priority, style and label.

        Args:
            name: Level name
            priority: Numeric priority (higher is more severe)
            style: Label style descriptor, e.g. {"fg": "blue", "bold": True}
            label: Display label (default: name)

        Returns:
            The registered Level

        Raises:
            InvalidStyleError: If the style cannot be rendered
        """
        level = self.levels.add(name, priority, style, label)

        if not self._has_attribute(name):
            def level_method(prefix: Any = "", *args: Any) -> None:
                self.log(name, prefix, *args)

            level_method.__name__ = name
            level_method.__doc__ = f"Log a message at level {name!r}."
            self._level_methods[name] = level_method

        return level

    def method(self, name: str) -> Callable[..., None]:
        """The method registered for a level (also reachable as ``log.<name>``)."""
        try:
            return self._level_methods[name]
        except KeyError:
            raise AttributeError(f"No method registered for level {name!r}") from None

    # -- logging ---------------------------------------------------------

    def log(self, level: str, prefix: Any = "", *args: Any) -> None:
        """
        Log a message.

        Args:
            level: Registered level name
            prefix: Short tag for the message (coerced to str)
            *args: printf-style template and values

        Unknown levels are reported on the "error" channel, never raised.
        """
        with self._lock:
            if level not in self.levels:
                self.emit(ERROR_EVENT, UndefinedLevelError(level))
                return

            message, raw_args = build_message(args)
            record = LogRecord(
                id=next(self._ids),
                level=level,
                prefix=str(prefix) if prefix else "",
                message=message,
                raw_args=raw_args,
            )

            self.emit("log", record)
            self.emit(f"log.{level}", record)
            if record.prefix:
                self.emit(record.prefix, record)

            self._records.append(record)
            self.emit_log(record)

    def emit_log(self, record: LogRecord) -> None:
        """
        Write a record, or queue it while paused.

        The progress line is pulsed for every record, then the level filter
        applies; records that pass are written with the progress line
        hidden and redrawn afterwards.
        """
        with self._lock:
            if self._progress.paused:
                self._pause_buffer.enqueue(record)
                return

            self._progress.pulse(record.prefix)

            level = self.levels.get(record.level)
            if level is None:
                return

            minimum = self.levels.priority(self.config.level)
            if minimum is not None and level.priority < minimum:
                return

            if level.is_silent:
                return

            self._progress.clear()

            for line in split_lines(record.message):
                heading = self.config.heading
                if heading:
                    self.write(heading, self.config.heading_style)
                    self.write(" ")
                self.write(level.label, level.style)
                if record.prefix:
                    self.write(" ")
                    self.write(record.prefix, self.config.prefix_style)
                self.write(" " + line + "\n")

            self._sink.flush()
            self._progress.show()

    # -- output ----------------------------------------------------------

    def write(self, text: str, style: StyleLike = None) -> None:
        """Write a styled fragment straight to the stream."""
        self._sink.write(text, style)

    def format(self, text: str, style: StyleLike = None) -> str:
        """Style a fragment the way write() would, without writing it."""
        return self._sink.format(text, style)

    def use_color(self) -> bool:
        return self._sink.use_color()

    @property
    def stream(self) -> Optional[TextIO]:
        return self._sink.stream

    @stream.setter
    def stream(self, stream: Optional[TextIO]) -> None:
        with self._lock:
            self._sink.stream = stream
            self._progress.set_write_target(stream)

    def enable_color(self) -> None:
        self.config.color = True
        self._progress.set_theme(has_color=True, has_unicode=self.config.unicode)

    def disable_color(self) -> None:
        self.config.color = False
        self._progress.set_theme(has_color=False, has_unicode=self.config.unicode)

    def enable_unicode(self) -> None:
        self.config.unicode = True
        self._progress.set_theme(has_color=self.use_color(), has_unicode=True)

    def disable_unicode(self) -> None:
        self.config.unicode = False
        self._progress.set_theme(has_color=self.use_color(), has_unicode=False)

    # -- configuration fields --------------------------------------------

    @property
    def level(self) -> str:
        """Minimum level name that is written."""
        return self.config.level

    @level.setter
    def level(self, name: str) -> None:
        if name not in self.levels:
            logger.warning(f"Minimum level set to unregistered level {name!r}; nothing will be filtered")
        self.config.level = name

    @property
    def heading(self) -> str:
        return self.config.heading

    @heading.setter
    def heading(self, value: Optional[str]) -> None:
        self.config.heading = value or ""

    @property
    def heading_style(self) -> Style:
        return Style.coerce(self.config.heading_style)

    @heading_style.setter
    def heading_style(self, value: StyleLike) -> None:
        self.config.heading_style = Style.coerce(value)

    @property
    def prefix_style(self) -> Style:
        return Style.coerce(self.config.prefix_style)

    @prefix_style.setter
    def prefix_style(self, value: StyleLike) -> None:
        self.config.prefix_style = Style.coerce(value)

    @property
    def max_record_size(self) -> int:
        return self._records.max_size

    @max_record_size.setter
    def max_record_size(self, value: int) -> None:
        self._records.max_size = value
        self.config.max_record_size = self._records.max_size

    @property
    def record(self) -> RecordBuffer:
        """Bounded history of records, oldest first."""
        return self._records

    # -- progress --------------------------------------------------------

    @property
    def progress_enabled(self) -> bool:
        return self._progress.enabled

    @property
    def paused(self) -> bool:
        return self._progress.paused

    def enable_progress(self) -> None:
        """Start showing the progress line (no-op while paused)."""
        self._progress.enable()

    def disable_progress(self) -> None:
        self._progress.disable()

    @contextmanager
    def progress_display(self) -> Iterator["Log"]:
        """
        Context manager showing the progress line for the duration.

        Usage:
            with log.progress_display():
                item = log.new_item("download", todo=len(files))
                ...
            # Progress line removed, logging continues normally
        """
        was_enabled = self._progress.enabled
        self.enable_progress()
        try:
            yield self
        finally:
            if not was_enabled:
                self.disable_progress()

    def show_progress(self, name: Optional[str] = None, completed: Optional[float] = None) -> None:
        self._progress.show(name, completed)

    def clear_progress(self, callback: Optional[Callable[[], None]] = None) -> None:
        self._progress.clear(callback)

    def set_gauge_template(self, template: Sequence[TemplateItem]) -> None:
        self._progress.set_template(template)

    def set_gauge_themeset(self, themeset: Themeset) -> None:
        self._progress.set_themeset(themeset)

    def pause(self) -> None:
        """Queue all output until resume(); the progress line is switched off."""
        with self._lock:
            self._progress.pause()

    def resume(self) -> None:
        """Write queued records in order and restore the progress line."""
        with self._lock:
            self._progress.resume(self._replay)

    def _replay(self) -> None:
        for record in self._pause_buffer.drain():
            self.emit_log(record)

    # -- tracking --------------------------------------------------------

    def new_group(self, name: str = "", weight: float = 1) -> LoggingTracker:
        return LoggingTracker(self.tracker.new_group(name, weight), self)

    def new_item(self, name: str = "", todo: float = 0, weight: float = 1) -> LoggingTracker:
        return LoggingTracker(self.tracker.new_item(name, todo, weight), self)

    def new_stream(self, name: str = "", todo: float = 0, weight: float = 1, source: Any = None) -> LoggingTracker:
        return LoggingTracker(self.tracker.new_stream(name, todo, weight, source), self)

    def __repr__(self) -> str:
        return (
            f"Log(level={self.config.level!r}, records={len(self._records)}, "
            f"progress={'on' if self._progress.enabled else 'off'})"
        )
