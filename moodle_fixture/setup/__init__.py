"""Site setup hand-off and config.php output."""

from moodle_fixture.setup.bootstrap import Initializer, bootstrap
from moodle_fixture.setup.php import dump_yaml, render_config_php, write_config_php

__all__ = [
    "Initializer",
    "bootstrap",
    "dump_yaml",
    "render_config_php",
    "write_config_php",
]
