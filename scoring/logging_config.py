"""Centralized logging configuration for the scoring engine."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "golfscoring"


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Optional[int] = None,
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``golfscoring`` logger hierarchy.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: from GOLF_LOG_LEVEL, else INFO)
        log_to_file: Whether to write a timestamped log file
        log_to_console: Whether to log to stdout

    Returns:
        Configured root logger for the engine
    """
    if level is None:
        from .config import get_config
        level = logging.getLevelName(get_config().log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'golfscoring_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger under the engine hierarchy.

    ``get_logger("matchplay")`` returns ``golfscoring.matchplay``.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
