"""Typed exception hierarchy for HTML-to-text conversion errors.

This module defines the base exception used across the toolkit. Every
package-specific exception (request handling, configuration, CLI) inherits
from HtmlTextError so callers can catch any application-level error with a
single except clause.
"""


class HtmlTextError(Exception):
    """Base exception for all html-text-toolkit errors.

    Use this to catch any application-level error from the toolkit.
    """
    pass


class ConversionError(HtmlTextError):
    """Raised when HTML content cannot be converted to plain text."""

    def __init__(self, message: str):
        super().__init__(message)
