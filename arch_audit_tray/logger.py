"""
Logging setup for the tray application.

The coordinator thread and the GUI thread log through the same loguru
logger, so every record carries the name of the thread it came from.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

LOG_DIR = Path.home() / ".cache" / "arch-audit-tray"
DEFAULT_LOG_PATH = LOG_DIR / "tray.log"
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{thread.name}</cyan> | {name}:{line} - <level>{message}</level>"
)

_configured = False


def stderr_level(verbose: bool) -> str:
    return "DEBUG" if verbose else "INFO"


def configure(level: str, log_path: Optional[Path] = None) -> None:
    """
    Install the stderr sink at ``level`` and a rotating debug log file.

    Only the first call takes effect. A log directory that cannot be created
    leaves stderr as the only sink.
    """
    global _configured
    if _configured:
        return
    _configured = True

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=level, format=LOG_FORMAT, enqueue=True)

    target = log_path or DEFAULT_LOG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _logger.warning("Log directory {} unavailable, file logging disabled: {}", target.parent, exc)
        return
    _logger.add(
        target,
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )


def get_logger():
    """Return the shared logger instance."""
    return _logger
