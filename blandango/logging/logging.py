"""
Structured Logging
==================

Driver components log through :meth:`LogManager.get_logger`, a structlog
logger wrapping the stdlib ``blandango.<component>`` logger with bound
context (database, collection). Events therefore obey the application's
stdlib levels and handlers; nothing is emitted unless ``blandango`` loggers
are enabled.

:meth:`LogManager.setup` is optional and meant for applications: it renders
those events as JSON lines and adds rotating log files.
"""

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import tempfile
import threading

import structlog

_ROOT_LOGGER = "blandango"
_MAX_BYTES = 10_485_760

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
}

_configured = False
_lock = threading.Lock()


def _log_directory() -> Path:
    """First writable of ``$LOG_DIR``, ``./logs`` and ``$TMPDIR/blandango_logs``."""
    candidates = [Path.cwd() / "logs"]
    if env_dir := os.environ.get("LOG_DIR"):
        candidates.insert(0, Path(env_dir))

    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        if os.access(candidate, os.W_OK):
            return candidate

    fallback = Path(tempfile.gettempdir()) / "blandango_logs"
    fallback.mkdir(exist_ok=True)
    return fallback


def _parse_level(level: str | int) -> int:
    """Map a level name (any case) to its numeric value.

    Raises:
        ValueError: If the name is not a logging level.
    """
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[str(level).upper()]
    except KeyError:
        raise ValueError(
            f"Invalid log level: {level!r}. Must be one of: {', '.join(sorted(_LEVELS))}"
        ) from None


def _add_rotating_files(logger: logging.Logger, log_dir: Path, level: int) -> None:
    # All events at the configured level, errors duplicated to their own file.
    for filename, handler_level, backups in (
        ("blandango.log", level, 5),
        ("errors.log", logging.ERROR, 3),
    ):
        handler = RotatingFileHandler(log_dir / filename, maxBytes=_MAX_BYTES, backupCount=backups)
        handler.setLevel(handler_level)
        logger.addHandler(handler)


def _json_processors() -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


class LogManager:
    """Structured logging for the driver and the applications using it."""

    @staticmethod
    def setup(log_level: str | int = "INFO", *, log_to_file: bool = True) -> None:
        """
        Render driver events as JSON lines.

        Args:
            log_level: Root log level; ``DEBUG`` shows every HTTP request
            log_to_file: Add rotating file handlers next to stderr output

        Raises:
            ValueError: If ``log_level`` is not a logging level.
        """
        global _configured

        with _lock:
            if _configured:
                return

            level = _parse_level(log_level)
            logging.basicConfig(level=level, format="%(message)s")
            logging.getLogger(_ROOT_LOGGER).setLevel(level)

            log_dir = None
            if log_to_file:
                log_dir = _log_directory()
                _add_rotating_files(logging.getLogger(), log_dir, level)

            structlog.configure(
                processors=_json_processors(),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            _configured = True

        LogManager.get_logger("logging").info(
            "logging_configured",
            log_dir=str(log_dir) if log_dir else None,
            level=logging.getLevelName(level),
        )

    @staticmethod
    def get_logger(component: str, **context):
        """
        Get a logger for a driver component.

        The logger is lazy: processors are resolved on first use, so loggers
        created at import time pick up a later :meth:`setup`.

        Args:
            component: Component name, e.g. ``"query"``
            **context: Key/values bound to every event (database, ...)
        """
        return structlog.wrap_logger(
            logging.getLogger(f"{_ROOT_LOGGER}.{component}"),
            wrapper_class=structlog.stdlib.BoundLogger,
            component=component,
            **context,
        )
