"""Logging setup for applications embedding the news client."""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

NOISY_LOGGERS = ("urllib3", "requests", "cachecontrol")


def setup_logging(level: Optional[str] = None, format_string: Optional[str] = None) -> None:
    """Configure the root logger with a console handler.

    Args:
        level: Logging level name. If None, reads LOG_LEVEL or defaults to INFO.
        format_string: Custom format string.

    Set the level to DEBUG to see every request and response body.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
