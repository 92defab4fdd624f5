"""Logging configuration for Price Analyst."""

import logging
import os
import sys

_LEVEL_ENV = "PRICE_ANALYST_LOG_LEVEL"


def setup_logger(name: str = "price_analyst", level: str | None = None) -> logging.Logger:
    """Create and configure a logger.

    The level falls back to ``$PRICE_ANALYST_LOG_LEVEL`` and then INFO.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        fmt = logging.Formatter(
            "%(asctime)s | %(name)-20s | %(levelname)-7s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    level = level or os.getenv(_LEVEL_ENV, "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
