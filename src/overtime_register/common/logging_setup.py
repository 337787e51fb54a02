from __future__ import annotations

import sys
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Replace loguru's default sink with stderr (and an optional file) at ``level``."""
    logger.remove()
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB", encoding="utf-8")
    logger.add(sys.stderr, level=level)
    logger.debug("Logging configured (level={}, file={})", level, log_file or "-")
