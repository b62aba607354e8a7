"""Rendering of a configuration record as a Moodle config.php file."""

from pathlib import Path
from typing import Any

import yaml

from moodle_fixture.config.errors import ConfigurationError
from moodle_fixture.config.record import ConfigurationRecord
from moodle_fixture.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SETUP_PATH = "lib/setup.php"
SECRET_MASK = "**********"

# Comment written before the first field of each group
SECTION_HEADERS = {
    "dbtype": "Database settings",
    "wwwroot": "Web address",
    "dataroot": "Data directory",
    "admin": "Admin directory",
    "directorypermissions": "Security",
    "debug": "Debug settings (for testing)",
    "cachejs": "Performance settings",
    "backup_auto_active": "Additional test settings",
}

# Flags Moodle conventionally writes as 0/1 rather than true/false
INT_FLAGS = {"dbpersist", "debugdisplay", "backup_auto_active"}

OCTAL_FIELDS = {"directorypermissions"}

# Assignments whose "=" is aligned at a fixed column
ALIGNED_FIELDS = {
    "dbtype",
    "dblibrary",
    "dbhost",
    "dbname",
    "dbuser",
    "dbpass",
    "prefix",
    "dboptions",
    "wwwroot",
    "dataroot",
    "admin",
}
ALIGN_WIDTH = 9


def php_literal(value: Any, name: str = "") -> str:
    """Convert a plain Python value to its PHP source literal."""
    if isinstance(value, bool):
        if name in INT_FLAGS:
            return "1" if value else "0"
        return "true" if value else "false"
    if isinstance(value, int):
        if name in OCTAL_FIELDS:
            return f"0{value:o}"
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    raise ConfigurationError(f"Cannot render {type(value).__name__} as PHP for {name!r}")


def _php_array(options: dict[str, Any]) -> str:
    lines = ["array("]
    for key, value in options.items():
        lines.append(f"    {php_literal(key)} => {php_literal(value, key)},")
    lines.append(")")
    return "\n".join(lines)


def render_config_php(
    config: ConfigurationRecord, setup_path: str = DEFAULT_SETUP_PATH
) -> str:
    """
    Render the record as the text of a config.php file.

    The file discards any existing $CFG, assigns every field in population
    order and finishes by requiring the setup script.

    Args:
        config: The record to render.
        setup_path: Setup script path, relative to the config.php directory.

    Returns:
        The PHP source.
    """
    lines = [
        "<?php",
        "unset($CFG);",
        "global $CFG;",
        "$CFG = new stdClass();",
    ]

    for name, value in config.as_cfg().items():
        header = SECTION_HEADERS.get(name)
        if header:
            lines.append("")
            lines.append(f"// {header}")
        if isinstance(value, dict):
            rendered = _php_array(value)
        else:
            rendered = php_literal(value, name)
        target = name.ljust(ALIGN_WIDTH) if name in ALIGNED_FIELDS else name
        lines.append(f"$CFG->{target} = {rendered};")

    lines.append("")
    lines.append(f"require_once(__DIR__ . {php_literal('/' + setup_path.lstrip('/'))});")
    return "\n".join(lines) + "\n"


def write_config_php(
    config: ConfigurationRecord,
    directory: str | Path,
    setup_path: str = DEFAULT_SETUP_PATH,
) -> Path:
    """Write config.php into an existing directory and return its path."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ConfigurationError(f"Not a directory: {directory}")

    path = directory / "config.php"
    path.write_text(render_config_php(config, setup_path), encoding="utf-8")
    logger.info("config_php_written", path=str(path))
    return path


def dump_yaml(config: ConfigurationRecord, reveal_secrets: bool = False) -> str:
    """Serialize the record as YAML, masking secrets unless asked not to."""
    data = config.as_cfg()
    if not reveal_secrets:
        for name in ("dbpass", "passwordsaltmain"):
            data[name] = SECRET_MASK
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
