"""Logging setup.

Modules log through ``structlog.get_logger(__name__)`` with key/value
events. configure_logging() routes them through stdlib logging so the
level set by LOG_LEVEL applies to both.
"""

import logging
from typing import Optional

import structlog

from nutrifex.infrastructure.config import get_log_level


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure stdlib logging and structlog processors.

    Args:
        level: Level name (e.g. "DEBUG"); defaults to LOG_LEVEL
    """
    level_name = (level or get_log_level()).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=numeric_level, format="%(message)s")
    logging.getLogger("nutrifex").setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
