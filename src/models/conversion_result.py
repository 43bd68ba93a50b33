"""Conversion result data model."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ConversionResult:
    """Result of HTML to plain text conversion.

    Attributes:
        text: Converted plain text
        original_length: Length of the input HTML in characters
        converted_length: Length of the converted text in characters
        characters_removed: original_length - converted_length, not clamped
        word_count: Number of whitespace-delimited words in the text
    """
    text: str
    original_length: int
    converted_length: int
    characters_removed: int
    word_count: int

    @property
    def stats(self) -> Dict[str, int]:
        """Statistics in their response form (camelCase keys)."""
        return {
            'originalLength': self.original_length,
            'convertedLength': self.converted_length,
            'charactersRemoved': self.characters_removed,
            'wordCount': self.word_count,
        }
