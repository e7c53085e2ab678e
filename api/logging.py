"""Structured logging configuration.

Logs always go to stderr: the CLI prints plans on stdout.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from api.config import get_settings


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog and standard logging.

    Args:
        log_level: Level name; defaults to the configured ``LOG_LEVEL``
        json_logs: Render JSON lines; defaults to True in production
    """
    settings = get_settings()
    level = logging.getLevelName((log_level or settings.log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(settings.is_production if json_logs is None else json_logs),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # uvicorn and other stdlib loggers
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)
