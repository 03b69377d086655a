"""
utils/logger.py
Simple logging wrapper for check-connection.

Records go to stderr: stdout is reserved for the report itself.
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually module name)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers; dotted children propagate to their parent
    if logger.handlers or "." in name:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.NOTSET)

    # Format: [LEVEL] message
    formatter = logging.Formatter(
        '%(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def set_level(level: int | str) -> None:
    """Change the level of the package logger and every child logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level!r}")
    log.setLevel(level)


# Default logger instance; module loggers are children ("check_connection.x")
log = get_logger("check_connection")


__all__ = ["get_logger", "set_level", "log"]
