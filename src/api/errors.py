"""Typed exception hierarchy for conversion request errors.

ValidationError covers bad input and is reported to the caller as-is.
InternalError stands for any unexpected failure and only ever carries a
generic message; the underlying exception is logged, never returned.
"""

from typing import Optional

from src.html_converter.errors import HtmlTextError


class RequestError(HtmlTextError):
    """Base exception for conversion request errors.

    Attributes:
        status_code: HTTP status code the error maps to
    """
    status_code = 500


class ValidationError(RequestError):
    """Raised when a conversion request is missing or has invalid input."""
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InternalError(RequestError):
    """Raised when conversion fails unexpectedly."""
    status_code = 500

    def __init__(self, message: str = "Failed to convert HTML to text"):
        super().__init__(message)
        self.message = message


class RateLimitError(RequestError):
    """Raised when a client exceeds the request rate limit."""
    status_code = 429

    def __init__(self, message: str = "Too many requests from this IP, please try again later."):
        super().__init__(message)
        self.message = message
