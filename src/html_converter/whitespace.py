"""Whitespace normalization and word counting for converted text."""

import re

_SPACE_RUN = re.compile(r'[ \t]+')
# Three or more newlines, possibly with whitespace between them
_BLANK_LINE_RUN = re.compile(r'\n\s*\n\s*\n')


def normalize_whitespace(text: str) -> str:
    """Collapse spaces and blank lines, then trim lines and the whole text.

    Applied in order:
      1. runs of spaces/tabs become one space
      2. three or more newlines become exactly two (one blank line)
      3. each line is trimmed
      4. leading and trailing newlines are removed

    Args:
        text: Text with markup already removed

    Returns:
        Normalized text
    """
    text = _SPACE_RUN.sub(' ', text)
    text = _BLANK_LINE_RUN.sub('\n\n', text)
    text = '\n'.join(line.strip() for line in text.split('\n'))
    return text.strip('\n')


def count_words(text: str) -> int:
    """Count whitespace-delimited words; 0 for empty or blank text."""
    return len(text.split())
