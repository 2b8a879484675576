"""
Logger setup shared by all modules
"""
import logging
import sys

from config.settings import LOG_LEVEL, LOG_FORMAT, LOG_FILE


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    Get a logger with console (and optional file) handlers attached.

    Args:
        name: Logger name (usually __name__)
        level: Override for LOG_LEVEL

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Already configured
    if logger.handlers:
        return logger

    logger.setLevel((level or LOG_LEVEL).upper())
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if LOG_FILE:
        file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Handlers are attached here, don't duplicate through root
    logger.propagate = False
    return logger
