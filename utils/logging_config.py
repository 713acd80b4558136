"""
Logging configuration for the application.
Sets up colorized console logging and an optional log file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import colorlog

from config.settings import LoggingConfig


def setup_logging(config: LoggingConfig, level: Optional[str] = None) -> logging.Logger:
    """
    Setup application logging.

    The console handler writes to stderr so that a diagram written to
    stdout stays clean.

    Args:
        config: Logging section of the settings
        level: Overrides ``config.level`` (e.g. from the command line)

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_level = getattr(logging, (level or config.level).upper(), logging.WARNING)
    console_handler = colorlog.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        '%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s: %(message)s',
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    ))
    root_logger.addHandler(console_handler)

    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        # Max 10MB per file, keep 5 backup files
        file_handler = RotatingFileHandler(
            config.log_file,
            mode='a',
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # SQLAlchemy echoes every statement at INFO
    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)

    return root_logger
