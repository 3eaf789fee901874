"""
Logging configuration for SunEvents.
Library modules only create named loggers; applications call configure_logging once.
"""

import os
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: Optional[str] = None, name: str = 'sunevents') -> logging.Logger:
    """
    Set up a stream handler on the package logger.

    Args:
        level: Logging level name; defaults to the LOG_LEVEL environment variable, then INFO
        name: Logger to configure

    Returns:
        Configured logger instance
    """
    if level is None:
        level = os.environ.get('LOG_LEVEL', 'INFO')

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Calling twice must not duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)

    return logger
