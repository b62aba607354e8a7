"""Tests for the fixture record loader and package settings."""

import pytest
from pydantic import SecretStr, ValidationError

from moodle_fixture.config import loader
from moodle_fixture.config.errors import ConfigurationError
from moodle_fixture.config.loader import get_settings, load_configuration


class TestLoadConfiguration:
    """Tests for load_configuration."""

    def test_database_values_pass_through(self, config):
        """Test that the database literals come through unchanged."""
        assert config.dbtype == "mariadb"
        assert config.dblibrary == "native"
        assert config.dbhost == "localhost"
        assert config.dbname == "moodle_test"
        assert config.dbuser == "moodle_user"
        assert config.dbpass.get_secret_value() == "moodle_password"
        assert config.prefix == "mdl_"
        assert config.dboptions.dbport == 3306
        assert config.dboptions.dbpersist is False
        assert config.dboptions.dbsocket == ""
        assert config.dboptions.dbcollation == "utf8mb4_unicode_ci"

    def test_site_and_security_values(self, config):
        """Test site, security, debug and performance values."""
        assert config.wwwroot == "https://test.moodle.local"
        assert config.dataroot == "/var/moodledata_test"
        assert config.admin == "admin"
        assert config.directorypermissions == 0o777
        assert config.passwordsaltmain.get_secret_value() == "test_salt_main_12345"
        assert config.debug == 0
        assert config.debugdisplay is False
        assert config.cachejs is True
        assert config.cachecss is True

    def test_backup_schedule(self, config):
        """Test that the backup schedule round-trips unchanged."""
        assert config.backup_auto_active is True
        assert config.backup_auto_weekdays == "0000001"
        assert config.backup_auto_hour == 2
        assert config.backup_auto_minute == 30

    def test_repeated_loads_identical(self):
        """Test that loading twice gives equal records."""
        first = load_configuration()
        second = load_configuration()
        assert first == second
        assert first.as_cfg() == second.as_cfg()
        assert first is not second

    def test_no_residue_from_previous_record(self, config):
        """Test that a differently valued record leaves nothing behind."""
        stale = config.model_copy(
            update={
                "dbname": "stale_db",
                "prefix": "old_",
                "passwordsaltmain": SecretStr("stale_salt"),
            }
        )
        assert stale.dbname == "stale_db"

        fresh = load_configuration()
        assert fresh.dbname == "moodle_test"
        assert fresh.prefix == "mdl_"
        assert fresh.passwordsaltmain.get_secret_value() == "test_salt_main_12345"
        assert fresh == config

    def test_ignores_environment(self, monkeypatch, config):
        """Test that environment variables do not affect the record."""
        monkeypatch.setenv("MOODLE_FIXTURE_DBNAME", "from_env")
        monkeypatch.setenv("DBNAME", "from_env")
        assert load_configuration() == config

    def test_malformed_literal_raises_configuration_error(self, monkeypatch):
        """Test that a broken literal surfaces as ConfigurationError."""
        monkeypatch.setattr(loader, "SecretStr", lambda value: SecretStr(""))
        with pytest.raises(ConfigurationError) as exc_info:
            load_configuration()
        assert "passwordsaltmain" in str(exc_info.value)


class TestSettings:
    """Tests for package settings."""

    def test_defaults(self):
        """Test default logging settings."""
        settings = get_settings()
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"

    def test_environment_override(self, monkeypatch):
        """Test that prefixed environment variables are read."""
        monkeypatch.setenv("MOODLE_FIXTURE_LOG_LEVEL", "debug")
        monkeypatch.setenv("MOODLE_FIXTURE_LOG_FORMAT", "console")
        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "console"

    @pytest.mark.parametrize(
        "name,value",
        [("MOODLE_FIXTURE_LOG_LEVEL", "verbose"), ("MOODLE_FIXTURE_LOG_FORMAT", "xml")],
    )
    def test_invalid_logging_settings_rejected(self, monkeypatch, name, value):
        """Test that unknown log levels and formats fail when settings load."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            get_settings()

    def test_settings_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()
