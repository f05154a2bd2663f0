"""
Logging setup for frame_registry.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
LOG_DIR = Path.home() / "AppData" / "Local" / "Frame Registry"
DEFAULT_LOG_PATH = LOG_DIR / "frame_registry.log"
ENV_LOG_PATH = "FRAME_REGISTRY_LOG"


def configure(log_path: Optional[Path] = None) -> None:
    """
    Configure loguru sinks for the package.

    Runs once per process; later calls are ignored.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    env_path = os.environ.get(ENV_LOG_PATH)
    target = log_path or (Path(env_path) if env_path else DEFAULT_LOG_PATH)
    target.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level="INFO", enqueue=True)
    _logger.add(
        target,
        level="DEBUG",
        rotation="1 MB",
        retention=3,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
