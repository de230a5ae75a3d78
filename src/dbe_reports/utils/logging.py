"""
utils/logging.py — structlog configuration for the CLI and API processes.

Output is JSON or human-readable console text, chosen by settings.log_format.

Usage:
    from dbe_reports.utils.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger("dbe_reports.reports.generator", report="contracts")
    log.info("report_generated", rows=42)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from dbe_shared.config import settings


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure structlog once at process startup. Safe to call again.

    Args:
        log_level:  Override settings.log_level ("DEBUG", "INFO", …).
        log_format: Override settings.log_format ("json" | "console").
    """
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    fmt = log_format or settings.log_format

    # Logs go to stderr so CLI output on stdout stays machine-readable
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> structlog.BoundLogger:
    """Return a structlog logger named `name`, bound to `initial_values`."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger  # type: ignore[return-value]
