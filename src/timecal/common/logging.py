from __future__ import annotations

import sys
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Route loguru output to stderr and, optionally, a log file."""
    logger.remove()
    if log_file:
        logger.add(log_file, level=level, rotation="1 MB", retention=5)
    logger.add(sys.stderr, level=level)
