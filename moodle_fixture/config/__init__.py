"""Configuration record, loader and package settings."""

from moodle_fixture.config.errors import ConfigurationError
from moodle_fixture.config.loader import Settings, get_settings, load_configuration
from moodle_fixture.config.record import ConfigurationRecord, DatabaseOptions

__all__ = [
    "ConfigurationError",
    "ConfigurationRecord",
    "DatabaseOptions",
    "Settings",
    "get_settings",
    "load_configuration",
]
