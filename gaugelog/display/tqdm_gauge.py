"""
tqdm Gauge

Progress display backed by a single tqdm bar, for terminals where a plain
tqdm line behaves better than rich output.
"""

import logging
from typing import Any, Optional, TextIO

from tqdm import tqdm

from gaugelog.display.base import Gauge
from gaugelog.display.template import bar_length, render_template

logger = logging.getLogger(__name__)

# Everything but the bar goes into the tqdm description
_DESCRIPTION_ITEMS = (
    "activity_indicator",
    "section",
    "subsection",
    "logline",
    "completed",
)

_SCALE = 1000


class TqdmGauge(Gauge):
    """
    tqdm-based progress gauge.

    Features:
    - tqdm draws the bar, sized from the template's progressbar item
    - Remaining template items become the bar description
    - Bar characters follow the active theme
    """

    def __init__(self, stream: Optional[TextIO] = None, **kwargs: Any) -> None:
        super().__init__(stream, **kwargs)
        self._bar: Optional[tqdm] = None

    def _ensure_bar(self) -> tqdm:
        if self._bar is None:
            theme = self.theme
            self._bar = tqdm(
                total=_SCALE,
                file=self._stream,
                leave=False,
                ascii=theme.remaining + theme.complete,
                bar_format=f"{{bar:{bar_length(self._template)}}}{{desc}}",
                dynamic_ncols=True,
                mininterval=0,
                miniters=1,
            )
        return self._bar

    def _description(self) -> str:
        line = render_template(
            self._template,
            self._values,
            self.theme,
            self._frame,
            include=_DESCRIPTION_ITEMS,
        )
        return " " + line.plain.strip()

    def _draw(self) -> None:
        bar = self._ensure_bar()
        completed = float(self._values.get("completed") or 0.0)
        bar.n = int(round(min(max(completed, 0.0), 1.0) * _SCALE))
        bar.set_description_str(self._description(), refresh=False)
        bar.refresh()

    def _erase(self) -> None:
        if self._bar is not None:
            self._bar.clear()

    def _close_bar(self) -> None:
        if self._bar is None:
            return
        try:
            self._bar.close()
        except (OSError, ValueError) as e:
            logger.warning(f"Error closing tqdm bar: {e}")
        self._bar = None

    def _on_disable(self) -> None:
        self._close_bar()

    def _on_appearance_changed(self) -> None:
        # Bar characters and target stream are fixed at construction
        self._close_bar()
