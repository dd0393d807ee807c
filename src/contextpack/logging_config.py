"""
Utility module for logging configuration.

This module configures the logging system for contextpack.
"""

import logging
import sys


def setup_logging(level=logging.INFO, stream=None):
    """
    Configure logging for contextpack.

    Args:
        level (int | str): Logging level (default: logging.INFO)
        stream: Stream the handler writes to (default: sys.stdout)

    Returns:
        logging.Logger: The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    # Create logger
    logger = logging.getLogger("contextpack")
    logger.setLevel(level)

    # Repeated calls (tests, re-entrant main) must not stack handlers
    for handler in list(logger.handlers):
        if getattr(handler, "_contextpack_handler", False):
            logger.removeHandler(handler)

    # Create console handler and set level
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler._contextpack_handler = True

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Add formatter to console handler
    console_handler.setFormatter(formatter)

    # Add console handler to logger
    logger.addHandler(console_handler)

    return logger
