"""Structured logging setup."""

from taskgate.core.logging.setup import configure_logging


__all__ = [
    "configure_logging",
]
