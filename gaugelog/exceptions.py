"""
gaugelog - Exceptions

Centralized exception hierarchy for all logging and progress display errors.
"""


class GaugeLogError(Exception):
    """Base exception for all gaugelog operations."""
    pass


class UndefinedLevelError(GaugeLogError):
    """Exception for log calls naming an unregistered level.

    Never raised by Log.log() itself; it is delivered on the "error"
    channel so malformed log calls cannot crash the host.
    """

    def __init__(self, level) -> None:
        self.level = level
        super().__init__(f'Undefined log level: "{level}"')


class InvalidStyleError(GaugeLogError):
    """Exception for style descriptors that cannot be rendered.

    Raised when:
    - A foreground or background color name is unknown
    - A style descriptor contains unsupported keys
    """
    pass


class UnknownGaugeError(GaugeLogError):
    """Exception for progress display names missing from the registry."""
    pass


class ConfigError(GaugeLogError):
    """Exception for invalid configuration.

    Raised when:
    - LogConfig.update() receives an unknown option
    """
    pass
