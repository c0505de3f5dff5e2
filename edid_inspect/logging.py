# edid_inspect/logging.py
"""
Logging setup using Loguru.

The report goes to stdout; log records go to stderr so the two never interleave
in a redirected report.
"""
from __future__ import annotations

import sys

from loguru import logger

_BRIEF_FORMAT = "<level>{level: <8}</level> - <level>{message}</level>"
_DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "| <level>{level: <8}</level> "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> "
    "- <level>{message}</level>"
)


def configure_logging(*, debug: bool = False) -> None:
    """Replace loguru's default sink with a single stderr sink.

    Args:
        debug: Emit DEBUG records with timestamps and source locations.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=_DEBUG_FORMAT if debug else _BRIEF_FORMAT,
        backtrace=debug,
        diagnose=debug,
    )
