"""HTML to plain text conversion.

This package provides the HtmlToTextConverter and the individual pipeline
stages it is built from: entity decoding, block element line breaks, tag
stripping and whitespace normalization.
"""

from .entities import decode_entities
from .errors import ConversionError, HtmlTextError
from .html_to_text import HtmlToTextConverter, html_to_text
from .tag_scanner import BLOCK_ELEMENTS, insert_block_line_breaks, strip_tags
from .whitespace import count_words, normalize_whitespace

__all__ = [
    'HtmlToTextConverter',
    'html_to_text',
    'decode_entities',
    'insert_block_line_breaks',
    'strip_tags',
    'normalize_whitespace',
    'count_words',
    'BLOCK_ELEMENTS',
    'HtmlTextError',
    'ConversionError',
]
