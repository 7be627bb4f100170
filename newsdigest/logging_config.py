"""Logging set-up shared by the CLI and any long-running caller."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from newsdigest.config import settings

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stderr handler to the ``newsdigest`` logger.

    Calling this more than once only updates the level.

    Args:
        level: Level name such as ``"DEBUG"``.  Defaults to
            ``settings.log_level``.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("newsdigest")
    logger.setLevel((level or settings.log_level).upper())
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
    return logger
