"""
Rich Gauge

Single-line progress display drawn in place with a rich Console. The line
is rendered from the gauge template, cropped to the terminal width and
rewritten after a carriage return and erase-line.
"""

import logging
from typing import Any, Optional, TextIO

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType

from gaugelog.display.base import Gauge

logger = logging.getLogger(__name__)

# Return to column 0 and erase the whole line
CLEAR_LINE = Control((ControlType.CARRIAGE_RETURN,), (ControlType.ERASE_IN_LINE, 2))


class RichGauge(Gauge):
    """
    Rich-based progress gauge.

    Features:
    - Template-driven line (bar, spinner, section, last log line)
    - Styled output when color is in effect, plain otherwise
    - Cropped to the console width so redraws never wrap
    """

    def __init__(self, stream: Optional[TextIO] = None, **kwargs: Any) -> None:
        super().__init__(stream, **kwargs)
        self._console: Optional[Console] = None
        self._console = self._make_console()

    def _make_console(self) -> Optional[Console]:
        if self._stream is None:
            return None
        return Console(
            file=self._stream,
            force_terminal=True,
            color_system="standard" if self.has_color() else None,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    @property
    def console(self) -> Optional[Console]:
        return self._console

    def _on_appearance_changed(self) -> None:
        self._console = self._make_console()

    def _draw(self) -> None:
        if self._console is None:
            return
        # Leave the last column free; writing into it wraps on some terminals
        line = self.render_line(width=max(self._console.width - 1, 1))
        self._console.control(CLEAR_LINE)
        self._console.print(line, end="")
        self._console.file.flush()

    def _erase(self) -> None:
        if self._console is None:
            return
        self._console.control(CLEAR_LINE)
        self._console.file.flush()
