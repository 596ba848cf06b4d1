"""
Logging setup for LearnStyle.

Library modules log through loguru's shared ``logger``; applications call
configure_logging() once at startup to choose sinks and level.
"""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

try:
    from ..config import config
except ImportError:
    from src.config import config


def configure_logging(level: Optional[str] = None, log_to_file: Optional[bool] = None) -> None:
    """
    Replace loguru's default sink with the configured ones.

    Args:
        level: Minimum level (defaults to config.logging.log_level)
        log_to_file: Also write a rotating log under logs_dir
            (defaults to config.logging.log_to_file)
    """
    level = (level or config.logging.log_level).upper()
    log_to_file = config.logging.log_to_file if log_to_file is None else log_to_file

    logger.remove()
    logger.add(sys.stderr, level=level, format=config.logging.log_format)

    if log_to_file:
        config.paths.logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.paths.logs_dir / "learnstyle.log",
            level=level,
            rotation=config.logging.rotation,
            encoding="utf-8",
        )

    logger.debug(f"Logging configured at {level} (file={log_to_file})")
