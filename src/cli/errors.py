"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.html_converter.errors import HtmlTextError


class CLIError(HtmlTextError):
    """Base exception for all CLI-related errors."""
    pass


class InputError(CLIError):
    """Raised when HTML input cannot be read."""

    def __init__(self, source: str, reason: Optional[str] = None):
        message = f"Cannot read HTML from {source}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.source = source
        self.reason = reason


class OutputError(CLIError):
    """Raised when converted text cannot be written."""

    def __init__(self, destination: str, reason: Optional[str] = None):
        message = f"Cannot write text to {destination}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.destination = destination
        self.reason = reason


class InitError(CLIError):
    """Raised when a configuration file cannot be initialized."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file already exists at {config_path} "
            f"(use --force to overwrite)"
        )
        self.config_path = config_path
