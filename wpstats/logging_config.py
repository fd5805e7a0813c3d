"""Centralized logging configuration for wpstats."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int | str = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the 'wpstats' logger.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level, as a number or a name like 'DEBUG'
        log_to_file: Whether to log to a timestamped file
        log_to_console: Whether to log to stderr

    Returns:
        Configured logger instance

    Example:
        from wpstats.logging_config import setup_logging
        logger = setup_logging(log_to_file=False)
        logger.info("Loading match stats")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger('wpstats')
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f'wpstats_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        # stdout carries the report itself
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = 'wpstats') -> logging.Logger:
    """Get a logger in the wpstats namespace."""
    if name != 'wpstats' and not name.startswith('wpstats.'):
        name = f'wpstats.{name}'
    return logging.getLogger(name)
