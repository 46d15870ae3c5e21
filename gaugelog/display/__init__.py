"""
Progress Display Components

In-place progress line ("gauge") implementations and their templates,
themes and registry.
"""

from gaugelog.display.base import Gauge
from gaugelog.display.rich_gauge import RichGauge
from gaugelog.display.tqdm_gauge import TqdmGauge
from gaugelog.display.template import DEFAULT_TEMPLATE, render_template
from gaugelog.display.themes import (
    ASCII_THEME,
    DEFAULT_THEMESET,
    UNICODE_THEME,
    GaugeTheme,
    Themeset,
)
from gaugelog.display.registry import GaugeRegistry, create_gauge, get_gauge_registry

__all__ = [
    'Gauge',
    'RichGauge',
    'TqdmGauge',
    'DEFAULT_TEMPLATE',
    'render_template',
    'ASCII_THEME',
    'UNICODE_THEME',
    'DEFAULT_THEMESET',
    'GaugeTheme',
    'Themeset',
    'GaugeRegistry',
    'create_gauge',
    'get_gauge_registry',
]
