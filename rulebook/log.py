"""Structured logging setup for host applications embedding the engine."""

import logging
from typing import Optional

import structlog

from rulebook.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the structlog processor chain.

    Console output in debug mode, JSON otherwise. The engine itself only
    calls structlog.get_logger(); configuring is left to the host.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
