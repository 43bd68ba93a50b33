"""Data models for conversion options and results."""

from src.models.conversion_options import ConversionOptions
from src.models.conversion_result import ConversionResult

__all__ = ['ConversionOptions', 'ConversionResult']
