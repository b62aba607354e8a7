"""Pydantic models for the Moodle test site configuration record."""

import posixpath
import re
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

WEEKDAYS_PATTERN = re.compile(r"^[01]{7}$")


# =============================================================================
# Site path helpers
# =============================================================================


def check_wwwroot(url: str) -> tuple[bool, str]:
    """
    Check that a web root is a well-formed http(s) URL.

    Returns:
        Tuple of (is_valid, reason). If not valid, reason explains why.
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL: {e}"

    if parsed.scheme not in ("http", "https"):
        return False, f"Invalid scheme: {parsed.scheme!r}. Only http/https allowed."

    if not parsed.hostname:
        return False, "No hostname in URL"

    if url.endswith("/"):
        # Moodle builds every link as wwwroot + '/...'
        return False, "wwwroot must not end with a slash"

    return True, "URL is valid"


def paths_disjoint(dataroot: str, wwwroot: str) -> bool:
    """Check that the data directory is neither the web root nor a prefix of it."""
    data = dataroot.rstrip("/")
    web = wwwroot.rstrip("/")
    if not data or data == web:
        return False
    if web.startswith(data):
        return False
    # A data directory under the served tree would be public
    web_path = urlparse(wwwroot).path.rstrip("/")
    if web_path and (data == web_path or data.startswith(web_path + "/")):
        return False
    return True


# =============================================================================
# Field groups
# =============================================================================


class DatabaseOptions(BaseModel):
    """Driver options passed through to the database layer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dbpersist: bool = False
    dbport: int = Field(3306, ge=1, le=65535)
    dbsocket: str = ""
    dbcollation: str = "utf8mb4_unicode_ci"


class ConfigurationRecord(BaseModel):
    """
    The $CFG record of a Moodle test site.

    Field order is the order in which a config.php populates them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Database
    dbtype: str = Field(..., min_length=1)
    dblibrary: str = Field(..., min_length=1)
    dbhost: str = Field(..., min_length=1)
    dbname: str = Field(..., min_length=1)
    dbuser: str = Field(..., min_length=1)
    dbpass: SecretStr
    prefix: str = Field(..., min_length=1, description="Prepended to every table name")
    dboptions: DatabaseOptions

    # Site
    wwwroot: str
    dataroot: str
    admin: str = Field(..., min_length=1)

    # Security
    directorypermissions: int = Field(..., ge=0, le=0o7777)
    passwordsaltmain: SecretStr

    # Debug
    debug: int = Field(..., ge=0)
    debugdisplay: bool

    # Performance
    cachejs: bool
    cachecss: bool

    # Backup schedule
    backup_auto_active: bool
    backup_auto_weekdays: str
    backup_auto_hour: int = Field(..., ge=0, le=23)
    backup_auto_minute: int = Field(..., ge=0, le=59)

    @field_validator("wwwroot")
    @classmethod
    def validate_wwwroot(cls, value: str) -> str:
        is_valid, reason = check_wwwroot(value)
        if not is_valid:
            raise ValueError(reason)
        return value

    @field_validator("dataroot")
    @classmethod
    def validate_dataroot(cls, value: str) -> str:
        if not posixpath.isabs(value):
            raise ValueError(f"dataroot must be an absolute path, got {value!r}")
        return value

    @field_validator("passwordsaltmain")
    @classmethod
    def validate_salt(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("passwordsaltmain must not be empty")
        return value

    @field_validator("backup_auto_weekdays")
    @classmethod
    def validate_weekdays(cls, value: str) -> str:
        if not WEEKDAYS_PATTERN.match(value):
            raise ValueError(
                f"backup_auto_weekdays must be 7 characters of 0/1, got {value!r}"
            )
        return value

    @model_validator(mode="after")
    def validate_dataroot_outside_wwwroot(self) -> "ConfigurationRecord":
        if not paths_disjoint(self.dataroot, self.wwwroot):
            raise ValueError(
                f"dataroot {self.dataroot!r} must be outside wwwroot {self.wwwroot!r}"
            )
        return self

    @property
    def backup_days(self) -> list[int]:
        """Weekday indexes (0 = Sunday) on which automated backups run."""
        return [day for day, flag in enumerate(self.backup_auto_weekdays) if flag == "1"]

    def as_cfg(self) -> dict[str, Any]:
        """Return the flat $CFG mapping with secrets revealed, in population order."""
        cfg: dict[str, Any] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            elif isinstance(value, DatabaseOptions):
                value = value.model_dump()
            cfg[name] = value
        return cfg
