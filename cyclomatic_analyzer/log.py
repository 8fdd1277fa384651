from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from .config import settings

_FORMAT = "{level: <8} | {name}:{line} - {message}"


def _stderr_sink(message: str) -> None:
    sys.stderr.write(message)


def configure_logging(level: Optional[str] = None) -> None:
    """Send package log records to stderr at the given (or configured) level."""
    logger.remove()
    logger.add(_stderr_sink, level=(level or settings.log_level).upper(), format=_FORMAT)
    logger.enable("cyclomatic_analyzer")
