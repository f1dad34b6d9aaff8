"""Minimal logging utilities for blogmark.

Example:
    >>> from blogmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``blogmark`` namespace.

    Example:
        >>> get_logger("mymodule").name
        'blogmark.mymodule'
    """
    if not (name == "blogmark" or name.startswith("blogmark.")):
        name = f"blogmark.{name}"
    return logging.getLogger(name)
