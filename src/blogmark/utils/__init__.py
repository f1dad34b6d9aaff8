"""Utility modules for blogmark.

Provides:
- text: slugify, escape_html, random_id
- logger: get_logger for logging
"""

from blogmark.utils.logger import get_logger
from blogmark.utils.text import escape_html, random_id, slugify

__all__ = [
    "escape_html",
    "get_logger",
    "random_id",
    "slugify",
]
