# src/watchlist_relay/utils/logging.py

import sys

from loguru import logger as log

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replaces loguru's default sink with a single stderr sink at `level`."""
    log.remove()
    log.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, backtrace=False)
    log.debug(f"Logging configured at level {level.upper()}")
