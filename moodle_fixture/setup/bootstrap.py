"""Hand-off of a finished configuration record to the site setup routine."""

from typing import Protocol, runtime_checkable

from moodle_fixture.config.loader import load_configuration
from moodle_fixture.config.record import ConfigurationRecord
from moodle_fixture.utils.logging import configure_logging, get_logger, run_context

logger = get_logger(__name__)


@runtime_checkable
class Initializer(Protocol):
    """External routine that sets up a site from a complete configuration."""

    def initialize(self, config: ConfigurationRecord) -> None:
        ...


def bootstrap(
    initializer: Initializer,
    config: ConfigurationRecord | None = None,
    run_id: str | None = None,
) -> ConfigurationRecord:
    """
    Populate the configuration and pass it to the setup routine.

    Args:
        initializer: The setup routine. Called exactly once.
        config: A prebuilt record. If None, the fixture record is loaded.
        run_id: Identifier bound to log events for this call. Generated if None.

    Returns:
        The record that was handed to the initializer.

    Raises:
        Whatever the initializer raises, unchanged.
    """
    configure_logging()

    with run_context(run_id):
        if config is None:
            config = load_configuration()

        logger.info("setup_started", initializer=type(initializer).__name__)
        try:
            initializer.initialize(config)
        except Exception as e:
            logger.error("setup_failed", error=str(e), error_type=type(e).__name__)
            raise
        logger.info("setup_finished")
    return config
