"""Exceptions for keyline-config."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing a configuration file.

    Raised by the loader and merge engine. ``ConfigStore`` catches it,
    reports it, and returns a failure flag instead of propagating.
    """

    pass


class ConfigValidationError(ConfigError):
    """Key or value cannot be represented as a single ``key: value`` line."""

    pass
