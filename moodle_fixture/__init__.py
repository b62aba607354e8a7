"""Moodle test site configuration fixture."""

__version__ = "1.0.0"
