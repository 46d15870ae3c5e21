"""
Standard Logging Bridge

Routes records from Python's logging module through a Log, so stdlib
logger output gets the same level filtering and the same progress-line
coordination as direct Log calls.
"""

import logging
from threading import RLock
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from gaugelog.log import Log

PACKAGE_LOGGER = "gaugelog"

# stdlib level floor -> gaugelog level, highest first
LEVEL_MAP = (
    (logging.ERROR, "error"),
    (logging.WARNING, "warn"),
    (logging.INFO, "info"),
    (logging.DEBUG, "verbose"),
)


def map_level(levelno: int) -> str:
    """gaugelog level name for a stdlib level number."""
    for floor, name in LEVEL_MAP:
        if levelno >= floor:
            return name
    return "silly"


class GaugeLogHandler(logging.Handler):
    """
    Handler that forwards stdlib records to a Log.

    The record's logger name becomes the prefix. Records from gaugelog's
    own loggers are dropped so the package's diagnostics never loop back
    into it.
    """

    def __init__(self, log: Optional["Log"] = None, level: int = logging.NOTSET) -> None:
        """
        Initialize handler.

        Args:
            log: Target Log (default: the process-wide instance)
            level: Handler level
        """
        super().__init__(level)
        self._log = log
        self.addFilter(self._not_from_package)

    @staticmethod
    def _not_from_package(record: logging.LogRecord) -> bool:
        name = record.name
        return not (name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."))

    @property
    def log(self) -> "Log":
        if self._log is None:
            from gaugelog.log import Log
            self._log = Log.get_instance()
        return self._log

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                self.log.log(map_level(record.levelno), record.name, message, record.exc_info[1])
            else:
                self.log.log(map_level(record.levelno), record.name, message)
        except Exception:
            self.handleError(record)


class LoggingBridge:
    """
    Installs a GaugeLogHandler in place of a stdlib logger's handlers.

    The previous handlers are remembered and restored by cleanup().

    Usage:
        with LoggingBridge(log):
            logging.getLogger("app").warning("routed through log")
    """

    def __init__(
        self,
        log: Optional["Log"] = None,
        logger_name: Optional[str] = None,
        level: int = logging.DEBUG,
    ) -> None:
        """
        Args:
            log: Target Log (default: the process-wide instance)
            logger_name: stdlib logger to bridge (default: root)
            level: Level applied to the bridged logger
        """
        self._lock = RLock()
        self._log = log
        self._logger_name = logger_name
        self._level = level
        self._handler: Optional[GaugeLogHandler] = None
        self._original_handlers: List[logging.Handler] = []
        self._original_level = logging.NOTSET

    @property
    def handler(self) -> Optional[GaugeLogHandler]:
        return self._handler

    def setup(self) -> GaugeLogHandler:
        """Replace the logger's handlers with a GaugeLogHandler."""
        with self._lock:
            if self._handler is not None:
                return self._handler

            target = logging.getLogger(self._logger_name)
            self._original_handlers = target.handlers.copy()
            self._original_level = target.level

            self._handler = GaugeLogHandler(self._log)
            target.handlers.clear()
            target.addHandler(self._handler)
            target.setLevel(self._level)
            return self._handler

    def cleanup(self) -> None:
        """Restore the handlers and level the logger had before setup()."""
        with self._lock:
            if self._handler is None:
                return

            target = logging.getLogger(self._logger_name)
            target.removeHandler(self._handler)
            target.handlers.extend(self._original_handlers)
            target.setLevel(self._original_level)

            self._handler.close()
            self._handler = None
            self._original_handlers = []

    def __enter__(self) -> GaugeLogHandler:
        return self.setup()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cleanup()
