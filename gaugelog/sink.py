"""
Write Sink

Wraps the raw output stream. Resolves whether color is in effect and writes
style-formatted fragments.
"""

import logging
from typing import Any, Mapping, Optional, TextIO, Union

from gaugelog import styles
from gaugelog.config import LogConfig
from gaugelog.styles import Style

logger = logging.getLogger(__name__)

StyleLike = Union[Style, Mapping[str, Any], None]


def is_interactive(stream: Optional[TextIO]) -> bool:
    """True when the stream reports itself as a terminal."""
    if stream is None:
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed streams raise on isatty()
        return False


class WriteSink:
    """Styled writer over a single output stream."""

    def __init__(self, stream: Optional[TextIO], config: LogConfig) -> None:
        """
        Initialize write sink.

        Args:
            stream: Output stream, or None to discard output
            config: Shared configuration (color override)
        """
        self.stream = stream
        self._config = config

    def use_color(self) -> bool:
        """Explicit override when set, otherwise whether the stream is a tty."""
        if self._config.color is not None:
            return self._config.color
        return is_interactive(self.stream)

    def format(self, text: str, style: StyleLike = None) -> str:
        return styles.render(text, style, self.use_color())

    def write(self, text: str, style: StyleLike = None) -> None:
        if self.stream is None:
            return
        self.stream.write(self.format(text, style))

    def flush(self) -> None:
        if self.stream is None:
            return
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
