"""Configuration loading: the fixture record and the package's own settings."""

from functools import lru_cache
from typing import Literal

import structlog
from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from moodle_fixture.config.errors import ConfigurationError
from moodle_fixture.config.record import ConfigurationRecord, DatabaseOptions

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """Package settings loaded from environment variables.

    These only tune logging; the configuration record never reads them.
    """

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(
        env_prefix="MOODLE_FIXTURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_configuration() -> ConfigurationRecord:
    """
    Build the Moodle test site configuration from its literal values.

    A new record is constructed on every call, so nothing from an earlier
    record carries over.

    Returns:
        The fully populated configuration record.

    Raises:
        ConfigurationError: If a literal breaks one of the record's invariants.
    """
    try:
        config = ConfigurationRecord(
            # Database settings
            dbtype="mariadb",
            dblibrary="native",
            dbhost="localhost",
            dbname="moodle_test",
            dbuser="moodle_user",
            dbpass=SecretStr("moodle_password"),
            prefix="mdl_",
            dboptions=DatabaseOptions(
                dbpersist=False,
                dbport=3306,
                dbsocket="",
                dbcollation="utf8mb4_unicode_ci",
            ),
            # Web address
            wwwroot="https://test.moodle.local",
            # Data directory
            dataroot="/var/moodledata_test",
            # Admin directory
            admin="admin",
            # Security
            directorypermissions=0o777,
            passwordsaltmain=SecretStr("test_salt_main_12345"),
            # Debug settings
            debug=0,
            debugdisplay=False,
            # Performance settings
            cachejs=True,
            cachecss=True,
            # Automated backups
            backup_auto_active=True,
            backup_auto_weekdays="0000001",
            backup_auto_hour=2,
            backup_auto_minute=30,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid test site configuration: {e}") from e

    logger.info(
        "configuration_loaded",
        dbtype=config.dbtype,
        dbname=config.dbname,
        wwwroot=config.wwwroot,
    )
    return config
