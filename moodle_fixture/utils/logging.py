"""Structured logging for fixture runs."""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from moodle_fixture.config.loader import get_settings

PACKAGE_LOGGER = "moodle_fixture"

_configured = False


def configure_logging(force: bool = False) -> bool:
    """
    Configure structlog from the package settings, once per process.

    Events are rendered by structlog and handed to the stdlib logger named
    after the emitting module, so test runners and host applications can
    capture them with ordinary logging handlers.

    Args:
        force: Reconfigure even if logging was already set up.

    Returns:
        True if this call configured logging, False if it was already done.
    """
    global _configured
    if _configured and not force:
        return False

    settings = get_settings()
    level = getattr(logging, settings.log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must follow a later reconfiguration
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    _configured = True
    return True


def reset_logging() -> None:
    """Return structlog to its defaults so the next run configures it again."""
    global _configured
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)
    _configured = False


@contextmanager
def run_context(run_id: str | None = None) -> Iterator[str]:
    """Attach a run ID to every event logged inside the block."""
    if run_id is None:
        run_id = uuid.uuid4().hex[:8]
    with structlog.contextvars.bound_contextvars(run_id=run_id):
        yield run_id


def get_run_id() -> str | None:
    """Run ID bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get("run_id")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
