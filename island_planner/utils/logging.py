"""
Logging framework for the Island Planner system.

This module configures logging for the planner, providing a consistent
logging interface across all modules.
"""

import os
import sys

from loguru import logger

from island_planner.config import LogLevel


def get_logger(name: str):
    """
    Get a logger instance for the specified module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance with the module name attached
    """
    return logger.bind(name=name)


def setup_logging(
    log_level: LogLevel | str = LogLevel.INFO, log_file: str | None = None
):
    """
    Set up the logging configuration for the application.

    Args:
        log_level: The logging level to use (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
    """
    if isinstance(log_level, str):
        log_level = LogLevel(log_level.upper())

    # Remove default logger
    logger.remove()

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=log_level.value,
        colorize=True,
    )

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        logger.add(
            log_file,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
                "{name}:{function}:{line} - {message}"
            ),
            level=log_level.value,
            rotation="10 MB",
            compression="zip",
        )

    logger.info(f"Logging initialized with level {log_level.value}")
