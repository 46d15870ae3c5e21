"""
Configuration Module

Process-wide settings for the logger (minimum level, color and unicode
modes, heading, styles, record history size, progress display choice)
and loading them from the environment.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

from gaugelog.exceptions import ConfigError
from gaugelog.records import DEFAULT_MAX_RECORD_SIZE

logger = logging.getLogger(__name__)

ENV_PREFIX = "GAUGELOG_"

# Tri-state switches: None means "decide from the stream"
_TRISTATE = {
    "always": True,
    "on": True,
    "true": True,
    "1": True,
    "never": False,
    "off": False,
    "false": False,
    "0": False,
    "auto": None,
    "": None,
}


@dataclass
class LogConfig:
    """Configuration settings shared by a Log and its progress display."""

    # Filtering
    level: str = "info"

    # Output styling (None = auto-detect from the stream)
    color: Optional[bool] = None
    unicode: Optional[bool] = None
    heading: str = ""
    heading_style: Dict[str, Any] = field(default_factory=lambda: {"fg": "white", "bg": "black"})
    prefix_style: Dict[str, Any] = field(default_factory=lambda: {"fg": "magenta"})

    # Memory management
    max_record_size: int = DEFAULT_MAX_RECORD_SIZE

    # Progress display
    gauge: str = "rich"
    update_interval: float = 0.05  # Minimum seconds between gauge redraws

    def update(self, **kwargs: Any) -> None:
        """
        Update specific configuration values.

        Raises:
            ConfigError: For options LogConfig does not define
        """
        known = {f.name for f in fields(self)}
        for key, value in kwargs.items():
            if key not in known:
                raise ConfigError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[Union[str, Path]] = None,
        use_dotenv: bool = True,
    ) -> "LogConfig":
        """
        Build configuration from GAUGELOG_* environment variables.

        Variables already set in the environment win over the .env file.
        Invalid values are reported and replaced with defaults.

        Args:
            dotenv_path: Explicit .env file (default: search from the cwd)
            use_dotenv: Set False to ignore .env files entirely

        Returns:
            LogConfig instance
        """
        if use_dotenv:
            load_dotenv(dotenv_path or Path.cwd() / ".env")

        config = cls()

        env_level = os.getenv(f"{ENV_PREFIX}LEVEL")
        if env_level:
            config.level = env_level.strip()

        config.color = _parse_tristate("COLOR", config.color)
        config.unicode = _parse_tristate("UNICODE", config.unicode)

        env_heading = os.getenv(f"{ENV_PREFIX}HEADING")
        if env_heading is not None:
            config.heading = env_heading

        env_max_record_size = os.getenv(f"{ENV_PREFIX}MAX_RECORD_SIZE")
        if env_max_record_size:
            try:
                max_record_size = int(env_max_record_size)
                if max_record_size < 1:
                    logger.warning(
                        f"{ENV_PREFIX}MAX_RECORD_SIZE must be at least 1, got {max_record_size}. "
                        f"Using default {DEFAULT_MAX_RECORD_SIZE}."
                    )
                else:
                    config.max_record_size = max_record_size
            except ValueError:
                logger.warning(
                    f"Invalid {ENV_PREFIX}MAX_RECORD_SIZE value '{env_max_record_size}', "
                    f"using default {DEFAULT_MAX_RECORD_SIZE}"
                )

        env_gauge = os.getenv(f"{ENV_PREFIX}GAUGE")
        if env_gauge:
            # Registry imports the display modules, which import this one
            from gaugelog.display.registry import get_gauge_registry

            gauge = env_gauge.strip().lower()
            available = get_gauge_registry().names()
            if gauge in available:
                config.gauge = gauge
            else:
                logger.warning(
                    f"Invalid {ENV_PREFIX}GAUGE value '{env_gauge}' "
                    f"(available: {', '.join(available)}), using default '{config.gauge}'"
                )

        env_interval = os.getenv(f"{ENV_PREFIX}UPDATE_INTERVAL")
        if env_interval:
            try:
                interval = float(env_interval)
                if interval < 0:
                    raise ValueError(env_interval)
                config.update_interval = interval
            except ValueError:
                logger.warning(
                    f"Invalid {ENV_PREFIX}UPDATE_INTERVAL value '{env_interval}', "
                    f"using default {config.update_interval}"
                )

        return config


def _parse_tristate(name: str, default: Optional[bool]) -> Optional[bool]:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in _TRISTATE:
        logger.warning(f"Invalid {ENV_PREFIX}{name} value '{raw}', using 'auto'")
        return None
    return _TRISTATE[value]
