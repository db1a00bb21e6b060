"""
Exceptions raised by logline.
"""


class ConfigError(ValueError):
    """Formatter configuration could not be loaded or is invalid."""

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key
