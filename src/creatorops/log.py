"""structlog setup shared by the API server and the CLI."""

from __future__ import annotations

import logging

import structlog

from creatorops.errors import ConfigurationError


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog once at process start."""
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        raise ConfigurationError(f"Unknown log level '{level}'", details={"level": level})

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        cache_logger_on_first_use=False,
    )
