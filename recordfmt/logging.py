"""
Structured logging configuration for the formatters' own diagnostics.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.typing import FilteringBoundLogger

from recordfmt.config import get_settings


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog for the package, defaulting to the environment settings."""
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level_name),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> FilteringBoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
