"""Minimal logging utilities for tinta.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from tinta.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Segmenting main.c")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "tinta." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'tinta.mymodule'
    """
    if not (name == "tinta" or name.startswith("tinta.")):
        name = f"tinta.{name}"
    return logging.getLogger(name)
