"""Errors raised while building or writing the test site configuration."""


class ConfigurationError(Exception):
    """Raised when a configuration record cannot be built or written."""
    pass
