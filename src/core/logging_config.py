"""Logging configuration.

The root logger is configured once at application startup. Modules log
through ``logging.getLogger(__name__)``.
"""

import logging
from typing import Optional

import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level name. Defaults to ``config.LOG_LEVEL``.
    """
    logging.basicConfig(
        level=getattr(logging, level or config.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
    )
    # SQLAlchemy echo is controlled by config.SQL_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
