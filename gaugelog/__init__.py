"""gaugelog - Leveled Logging with an Integrated Progress Line

Log messages and hierarchical progress tracking share one output stream.
The progress line is erased before every log line and redrawn afterwards,
so the two never garble each other.

Usage:
    from gaugelog import get_log

    log = get_log()
    log.info("setup", "loading %d files", 3)

    with log.progress_display():
        item = log.new_item("download", todo=3)
        for name in files:
            item.verbose("download", name)
            item.complete_work(1)
"""

# Exceptions (centralized)
from gaugelog.exceptions import (
    ConfigError,
    GaugeLogError,
    InvalidStyleError,
    UndefinedLevelError,
    UnknownGaugeError,
)

# Core
from gaugelog.config import LogConfig
from gaugelog.events import EventEmitter
from gaugelog.formatting import format_message
from gaugelog.levels import DEFAULT_LEVELS, Level, LevelTable
from gaugelog.log import Log
from gaugelog.records import LogRecord, PauseBuffer, RecordBuffer
from gaugelog.styles import Style

# Progress
from gaugelog.display import Gauge, RichGauge, TqdmGauge, Themeset, create_gauge
from gaugelog.handles import LoggingTracker
from gaugelog.tracker import Tracker, TrackerGroup, TrackerStream

# stdlib logging bridge
from gaugelog.handlers import GaugeLogHandler, LoggingBridge


def get_log() -> Log:
    """The process-wide Log, created from the environment on first use."""
    return Log.get_instance()


__version__ = "0.1.0"
__all__ = [
    # Exceptions
    "GaugeLogError",
    "UndefinedLevelError",
    "InvalidStyleError",
    "UnknownGaugeError",
    "ConfigError",
    # Core
    "Log",
    "get_log",
    "LogConfig",
    "EventEmitter",
    "format_message",
    "DEFAULT_LEVELS",
    "Level",
    "LevelTable",
    "LogRecord",
    "RecordBuffer",
    "PauseBuffer",
    "Style",
    # Progress
    "Gauge",
    "RichGauge",
    "TqdmGauge",
    "Themeset",
    "create_gauge",
    "LoggingTracker",
    "Tracker",
    "TrackerGroup",
    "TrackerStream",
    # Logging bridge
    "GaugeLogHandler",
    "LoggingBridge",
]
