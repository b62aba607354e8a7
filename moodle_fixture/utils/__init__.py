"""Utility modules: logging."""

from moodle_fixture.utils.logging import configure_logging, get_logger, run_context

__all__ = ["configure_logging", "get_logger", "run_context"]
