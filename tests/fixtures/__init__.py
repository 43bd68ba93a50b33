"""Test fixtures for HTML to text conversion tests.

This module provides sample HTML documents paired with the plain text
they convert to under default options.
"""

from .sample_html import (
    ARTICLE_HTML,
    ARTICLE_TEXT,
    TABLE_HTML,
    TABLE_TEXT,
)

__all__ = [
    "ARTICLE_HTML",
    "ARTICLE_TEXT",
    "TABLE_HTML",
    "TABLE_TEXT",
]
