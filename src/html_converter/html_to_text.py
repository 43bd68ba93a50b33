"""HTML to plain text converter.

This module provides the HtmlToTextConverter, which strips markup from HTML,
decodes character entities and normalizes whitespace while keeping the line
structure implied by block-level elements.
"""

import logging
from typing import Optional

from src.html_converter.entities import decode_entities
from src.html_converter.errors import ConversionError
from src.html_converter.tag_scanner import insert_block_line_breaks, strip_tags
from src.html_converter.whitespace import count_words, normalize_whitespace
from src.models.conversion_options import ConversionOptions
from src.models.conversion_result import ConversionResult

logger = logging.getLogger(__name__)


class HtmlToTextConverter:
    """Converts HTML to plain text.

    The pipeline runs four stages in a fixed order, each one consuming the
    full output of the previous stage:

    1. entity decoding (if ``convert_entities``)
    2. block element tags to newlines (if ``preserve_line_breaks``)
    3. removal of every remaining tag
    4. whitespace normalization (if ``remove_extra_spaces``)

    Entities are decoded before tags are processed, so escaped markup such
    as ``&lt;b&gt;`` is removed like a real tag.

    The converter holds no state and can be shared between threads.

    Example:
        >>> converter = HtmlToTextConverter()
        >>> converter.convert("<p>Hello</p><p>World</p>").text
        'Hello\\n\\nWorld'
    """

    def __init__(self, default_options: Optional[ConversionOptions] = None):
        """Initialize the converter.

        Args:
            default_options: Options used when convert() is called without
                any; all flags enabled when omitted
        """
        self.default_options = default_options or ConversionOptions()

    def convert(
        self,
        html: str,
        options: Optional[ConversionOptions] = None,
    ) -> ConversionResult:
        """Convert HTML to plain text.

        Args:
            html: Raw HTML; may be empty
            options: Pipeline flags (default_options when None)

        Returns:
            ConversionResult with the text and its statistics

        Raises:
            ConversionError: If html is not a string
        """
        if not isinstance(html, str):
            raise ConversionError(
                f"HTML content must be a string, got {type(html).__name__}"
            )
        options = options or self.default_options
        text = self.convert_text(html, options)

        original_length = len(html)
        converted_length = len(text)
        logger.debug(
            f"Converted {original_length} characters of HTML to "
            f"{converted_length} characters of text"
        )
        return ConversionResult(
            text=text,
            original_length=original_length,
            converted_length=converted_length,
            characters_removed=original_length - converted_length,
            word_count=count_words(text),
        )

    def convert_text(self, html: str, options: ConversionOptions) -> str:
        """Run the pipeline and return only the converted text."""
        text = html
        if options.convert_entities:
            text = decode_entities(text)
        if options.preserve_line_breaks:
            text = insert_block_line_breaks(text)
        text = strip_tags(text)
        if options.remove_extra_spaces:
            text = normalize_whitespace(text)
        return text


def html_to_text(html: str, options: Optional[ConversionOptions] = None) -> str:
    """Convert HTML to plain text with a throwaway converter."""
    return HtmlToTextConverter().convert(html, options).text
