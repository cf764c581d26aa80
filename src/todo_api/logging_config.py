"""
Structured logging setup.

Console output for local development, JSON lines when LOG_FORMAT=json. Request
scoped values such as request_id are merged in from structlog contextvars.
"""
from __future__ import annotations

import logging
import sys

import structlog


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog and route stdlib logging (uvicorn, pymongo) to stdout."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )
