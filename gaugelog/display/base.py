"""
Gauge Base Class

Abstract progress display: an in-place status line that can be enabled,
disabled, shown with new values, hidden around other output, and pulsed.
Concrete gauges only implement drawing and erasing the line.
"""

import logging
import time
from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, TextIO, Tuple

from rich.text import Text

from gaugelog.display.template import (
    DEFAULT_TEMPLATE,
    TemplateItem,
    render_template,
    validate_template,
)
from gaugelog.display.themes import DEFAULT_THEMESET, GaugeTheme, Themeset, detect_unicode
from gaugelog.sink import is_interactive
from gaugelog.utils import defer

logger = logging.getLogger(__name__)


class Gauge(ABC):
    """
    Base class for progress displays.

    Redraws are throttled to update_interval seconds while the line is
    visible. A hidden line is redrawn on the next show() immediately, so a
    gauge hidden for a log write comes straight back, and so is a line whose
    completion or section changed, so the final state always reaches the
    stream. Only spinner ticks and activity notes are throttled.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        template: Optional[Sequence[TemplateItem]] = None,
        themeset: Optional[Themeset] = None,
        has_color: Optional[bool] = None,
        has_unicode: Optional[bool] = None,
        update_interval: float = 0.05,
    ) -> None:
        """
        Initialize gauge.

        Args:
            stream: Output stream the line is drawn on
            template: Line layout (default: bar, spinner, section, logline)
            themeset: Themes to pick from
            has_color: Force color on/off (None = stream is a tty)
            has_unicode: Force unicode on/off (None = stream encoding)
            update_interval: Minimum seconds between redraws of a visible line
        """
        self._lock = RLock()
        self._stream = stream
        self._template = validate_template(template or DEFAULT_TEMPLATE)
        self._themeset = themeset or DEFAULT_THEMESET
        self._has_color = has_color
        self._has_unicode = has_unicode
        self.update_interval = update_interval

        self._enabled = False
        self._visible = False
        self._values: Dict[str, Any] = {}
        self._frame = 0
        self._last_draw = 0.0
        self._drawn_progress: Optional[Tuple[Any, Any]] = None

    # -- state -----------------------------------------------------------

    def enable(self) -> None:
        with self._lock:
            if self._enabled:
                return
            self._enabled = True
            logger.debug(f"Enabled progress display: {type(self).__name__}")

    def disable(self) -> None:
        with self._lock:
            if not self._enabled:
                return
            if self._visible:
                self._safe_erase()
            self._enabled = False
            self._on_disable()
            logger.debug(f"Disabled progress display: {type(self).__name__}")

    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def is_visible(self) -> bool:
        with self._lock:
            return self._visible

    @property
    def values(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)

    @property
    def stream(self) -> Optional[TextIO]:
        return self._stream

    # -- drawing ---------------------------------------------------------

    def show(self, values: Optional[Mapping[str, Any]] = None) -> None:
        """Merge new values and redraw the line."""
        with self._lock:
            if values:
                self._values.update(values)
            if not self._enabled:
                return
            self._request_draw(force=not self._visible or self._progress_changed())

    def hide(self, callback: Optional[Callable[[], None]] = None) -> None:
        """Erase the line until the next show(); the callback runs afterwards."""
        with self._lock:
            if self._enabled and self._visible:
                self._safe_erase()
        defer(callback)

    def pulse(self, key: Optional[str] = None) -> None:
        """Advance the activity indicator, noting what the activity was."""
        with self._lock:
            if not self._enabled:
                return
            self._frame += 1
            self._values["subsection"] = key or ""
            if self._visible:
                self._request_draw(force=False)

    def render_line(self, width: Optional[int] = None) -> Text:
        with self._lock:
            return render_template(
                self._template, self._values, self.theme, self._frame, width
            )

    def _progress_key(self) -> Tuple[Any, Any]:
        return self._values.get("completed"), self._values.get("section")

    def _progress_changed(self) -> bool:
        return self._progress_key() != self._drawn_progress

    def _request_draw(self, force: bool) -> None:
        if self._stream is None:
            return

        now = time.monotonic()
        if not force and now - self._last_draw < self.update_interval:
            return

        try:
            self._draw()
        except (OSError, ValueError) as e:
            # Closed or broken stream: stop drawing rather than fail the log call
            logger.warning(f"Progress display failed, disabling: {e}")
            self._enabled = False
            self._visible = False
            return

        self._visible = True
        self._last_draw = now
        self._drawn_progress = self._progress_key()

    def _safe_erase(self) -> None:
        try:
            self._erase()
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to clear progress display: {e}")
        self._visible = False

    # -- appearance ------------------------------------------------------

    @property
    def theme(self) -> GaugeTheme:
        return self._themeset.get(self.has_unicode(), self.has_color())

    def has_color(self) -> bool:
        if self._has_color is not None:
            return self._has_color
        return is_interactive(self._stream)

    def has_unicode(self) -> bool:
        if self._has_unicode is not None:
            return self._has_unicode
        return detect_unicode(self._stream)

    def set_theme(self, has_color: Optional[bool] = None, has_unicode: Optional[bool] = None) -> None:
        """Choose theme flags; None keeps auto-detection for that flag."""
        with self._lock:
            self._has_color = has_color
            self._has_unicode = has_unicode
            self._on_appearance_changed()

    def set_template(self, template: Sequence[TemplateItem]) -> None:
        with self._lock:
            self._template = validate_template(template)
            self._on_appearance_changed()

    def set_themeset(self, themeset: Themeset) -> None:
        with self._lock:
            self._themeset = themeset
            self._on_appearance_changed()

    def set_write_target(self, stream: Optional[TextIO]) -> None:
        """Move the line to another stream; it reappears on the next show()."""
        with self._lock:
            if self._visible:
                self._safe_erase()
            self._stream = stream
            self._on_appearance_changed()

    # -- hooks -----------------------------------------------------------

    def is_available(self) -> bool:
        """Check if this gauge can run in the current environment."""
        return True

    def _on_appearance_changed(self) -> None:
        """Called when theme, template or stream change. Default no-op."""
        return

    def _on_disable(self) -> None:
        """Called after the gauge is disabled. Default no-op."""
        return

    @abstractmethod
    def _draw(self) -> None:
        """Draw the current line in place."""
        pass

    @abstractmethod
    def _erase(self) -> None:
        """Erase the line, leaving the cursor at column 0."""
        pass
