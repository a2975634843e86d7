"""
Structured logging configuration using structlog.

This module sets up structlog for JSON-based structured logging with context binding.
"""

import logging
from typing import Optional, TextIO

import structlog

from .config import settings


def setup_logging(stream: Optional[TextIO] = None) -> None:
    """
    Configure structlog for structured JSON logging.

    Args:
        stream: Log destination (default: stdout). The CLI passes stderr so that
            results written to stdout stay machine-readable.

    Sets up processors for:
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - Timestamp addition
    - JSON or console rendering based on settings
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if settings.log_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

