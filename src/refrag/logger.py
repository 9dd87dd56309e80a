# src/refrag/logger.py
"""Logging setup using Loguru."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def setup_logger(log_level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure loguru sinks for refrag.

    Logs go to stderr so that stdout carries only the answer text.

    Args:
        log_level: Minimum level for all sinks (e.g. "DEBUG", "INFO").
        log_file: Optional path for a rotating, compressed log file.
    """
    logger.remove()

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    logger.debug(f"Logger initialised | level={log_level} | file={log_file}")
