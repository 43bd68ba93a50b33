"""Conversion request handling and HTTP service.

This package implements the HTML to text request contract and exposes it
over HTTP with FastAPI.
"""

from .errors import InternalError, RateLimitError, RequestError, ValidationError
from .request_handler import (
    ConversionRequestHandler,
    handle_conversion_request,
    validate_request,
)
from .server import create_app, run_server

__all__ = [
    'ConversionRequestHandler',
    'handle_conversion_request',
    'validate_request',
    'create_app',
    'run_server',
    'RequestError',
    'ValidationError',
    'InternalError',
    'RateLimitError',
]
