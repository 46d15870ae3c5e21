import io
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from gaugelog.config import LogConfig
from gaugelog.log import Log

# --- Fakes ---


class RecordingGauge:
    """
    Gauge stand-in that records every call made by the progress coordinator.
    hide() runs its callback straight away.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True
        self.calls.append(("enable",))

    def disable(self) -> None:
        self.enabled = False
        self.calls.append(("disable",))

    def is_enabled(self) -> bool:
        return self.enabled

    def show(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.calls.append(("show", dict(values or {})))

    def hide(self, callback: Optional[Callable[[], None]] = None) -> None:
        self.calls.append(("hide",))
        if callback is not None:
            callback()

    def pulse(self, key: Optional[str] = None) -> None:
        self.calls.append(("pulse", key))

    def set_theme(self, has_color: Optional[bool] = None, has_unicode: Optional[bool] = None) -> None:
        self.calls.append(("set_theme", has_color, has_unicode))

    def set_template(self, template: Any) -> None:
        self.calls.append(("set_template", template))

    def set_themeset(self, themeset: Any) -> None:
        self.calls.append(("set_themeset", themeset))

    def set_write_target(self, stream: Any) -> None:
        self.calls.append(("set_write_target", stream))

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def shown(self) -> List[Dict[str, Any]]:
        return [call[1] for call in self.calls if call[0] == "show"]


# --- Fixtures ---


@pytest.fixture
def stream() -> io.StringIO:
    # StringIO is not a tty and has no encoding: no color, ascii theme
    return io.StringIO()


@pytest.fixture
def gauge() -> RecordingGauge:
    return RecordingGauge()


@pytest.fixture
def log(stream: io.StringIO, gauge: RecordingGauge) -> Log:
    return Log(stream=stream, gauge=gauge, config=LogConfig())
