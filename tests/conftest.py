"""Pytest configuration and fixtures."""

import pytest

from moodle_fixture.config.loader import get_settings, load_configuration
from moodle_fixture.config.record import ConfigurationRecord
from moodle_fixture.utils.logging import get_run_id, reset_logging


class RecordingInitializer:
    """Initializer that remembers every record it was given."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[ConfigurationRecord] = []
        self.run_ids: list[str | None] = []
        self.error = error

    def initialize(self, config: ConfigurationRecord) -> None:
        self.calls.append(config)
        self.run_ids.append(get_run_id())
        if self.error is not None:
            raise self.error


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached package settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Start each test with unconfigured logging and no bound context."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def config() -> ConfigurationRecord:
    """A freshly loaded fixture record."""
    return load_configuration()


@pytest.fixture
def cfg_values(config):
    """Plain field values of the fixture record, for building variants."""
    return config.as_cfg()


@pytest.fixture
def initializer():
    """Initializer that records its calls."""
    return RecordingInitializer()


@pytest.fixture
def make_initializer():
    """RecordingInitializer factory."""
    def _make(error: Exception | None = None) -> RecordingInitializer:
        return RecordingInitializer(error=error)
    return _make
