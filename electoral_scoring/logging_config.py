"""
Logging setup - Ranking Electoral
electoral_scoring/logging_config.py

structlog on top of stdlib logging. Calculators emit event-style records
(``logger.debug("education_calculated", total=...)``); this module decides
how they are rendered.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from electoral_scoring.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> structlog.BoundLogger:
    """Configure structlog rendering (JSON or console) and the root log level."""
    settings = settings or get_settings()
    level = settings.LOG_LEVEL.upper()

    logging.basicConfig(level=level, format="%(message)s")

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()
