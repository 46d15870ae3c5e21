"""
Gauge Registry

Thread-safe registry of progress display classes, keyed by name, with the
factory used by Log to build its default gauge.
"""

import logging
from threading import RLock
from typing import Any, Dict, List, Optional, TextIO, Type

from gaugelog.display.base import Gauge
from gaugelog.display.rich_gauge import RichGauge
from gaugelog.display.tqdm_gauge import TqdmGauge
from gaugelog.exceptions import UnknownGaugeError

logger = logging.getLogger(__name__)

DEFAULT_GAUGE = "rich"


class GaugeRegistry:
    """Thread-safe registry for gauge classes."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._gauges: Dict[str, Type[Gauge]] = {}

    def register(self, name: str, gauge_class: Type[Gauge]) -> None:
        """Register a gauge class under a name (replacing any previous one)."""
        with self._lock:
            self._gauges[name] = gauge_class
            logger.debug(f"Registered gauge: {name}")

    def get(self, name: str) -> Type[Gauge]:
        """
        Get a gauge class by name.

        Raises:
            UnknownGaugeError: If no gauge is registered under the name
        """
        with self._lock:
            try:
                return self._gauges[name]
            except KeyError:
                available = ", ".join(sorted(self._gauges)) or "none"
                raise UnknownGaugeError(
                    f"Unknown gauge '{name}' (available: {available})"
                ) from None

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._gauges)

    def list_available(self, stream: Optional[TextIO] = None) -> Dict[str, bool]:
        """List all gauges and whether each can run against the stream."""
        with self._lock:
            gauges = dict(self._gauges)

        result = {}
        for name, gauge_class in gauges.items():
            try:
                result[name] = gauge_class(stream).is_available()
            except Exception as e:
                logger.debug(f"Gauge {name} unavailable: {e}")
                result[name] = False
        return result


# Global gauge registry
_registry = GaugeRegistry()
_registry.register("rich", RichGauge)
_registry.register("tqdm", TqdmGauge)


def get_gauge_registry() -> GaugeRegistry:
    """Get the global gauge registry."""
    return _registry


def create_gauge(
    name: Optional[str] = None,
    stream: Optional[TextIO] = None,
    **kwargs: Any,
) -> Gauge:
    """
    Instantiate a registered gauge.

    Args:
        name: Registered gauge name (default: "rich")
        stream: Output stream for the gauge
        **kwargs: Passed to the gauge constructor

    Returns:
        Gauge instance, initially disabled

    Raises:
        UnknownGaugeError: If the name is not registered
    """
    gauge_class = _registry.get(name or DEFAULT_GAUGE)
    gauge = gauge_class(stream, **kwargs)
    logger.debug(f"Created gauge: {type(gauge).__name__}")
    return gauge
