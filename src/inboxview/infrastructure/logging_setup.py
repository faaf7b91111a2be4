from __future__ import annotations

import os
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr. LOG_LEVEL wins over ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=(os.getenv("LOG_LEVEL") or level or "INFO").upper(),
    )
