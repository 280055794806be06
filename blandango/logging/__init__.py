"""Structured logging for driver components (structlog)."""

from .logging import LogManager

__all__ = ["LogManager"]
