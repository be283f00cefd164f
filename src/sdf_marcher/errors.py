"""Exceptions raised by the renderer."""


class InvalidVectorError(ValueError):
    """Raised when an operation needs a non-zero vector and gets a zero one."""


class ConfigError(ValueError):
    """Raised when image settings or a serialized scene cannot be used."""
