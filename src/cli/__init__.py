"""Command-line interface for HTML to text conversion.

This package provides the `html-text` CLI tool, which converts HTML files
or stdin to plain text and runs the HTTP conversion service.
"""

from .models import ExitCode
from .errors import CLIError, InitError, InputError, OutputError

__all__ = [
    'ExitCode',
    'CLIError',
    'InitError',
    'InputError',
    'OutputError',
]
