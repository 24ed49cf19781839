"""Minimal logging utilities for mathinline.

Example:
    >>> from mathinline.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("rejected candidate at offset %d", 12)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``mathinline``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("scanner").name
        'mathinline.scanner'
    """
    if not (name == "mathinline" or name.startswith("mathinline.")):
        name = f"mathinline.{name}"
    return logging.getLogger(name)
