"""Logging setup.

Modules log through ``structlog.get_logger(__name__)``; this wires
structlog on top of the standard library logging handlers.
"""

import logging
from typing import Optional

import structlog

from profile_service.infrastructure.config import get_log_format, get_log_level


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name (defaults to LOG_LEVEL env var)
        fmt: "console" or "json" (defaults to LOG_FORMAT env var)
    """
    level_name = (level or get_log_level()).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=numeric_level, format="%(message)s", force=True)

    renderer: structlog.types.Processor
    if (fmt or get_log_format()) == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # motor/pymongo are chatty at DEBUG
    if numeric_level < logging.INFO:
        logging.getLogger("pymongo").setLevel(logging.INFO)
