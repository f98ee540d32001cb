"""
archartifacts.core.logging - Structured Logging Setup
=======================================================

Every module logs through ``structlog.get_logger()`` and binds a
``component=`` context. This module configures the processor chain once at
startup:

    console → coloured key/value lines for local development
    json    → one JSON object per line for log aggregators
"""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog for the whole process.

    Args:
        level: Logging level name (DEBUG, INFO, ...). Unknown names fall
            back to INFO.
        fmt: ``"json"`` or ``"console"``.
    """
    level_number = logging.getLevelName(level.upper())
    if not isinstance(level_number, int):
        level_number = logging.INFO

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if fmt == "json":
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(),
        ]

    # Not cached on first use: create_app() may reconfigure in the same
    # process (tests build many apps).
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_number),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
