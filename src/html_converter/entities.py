"""HTML character entity decoding.

Decodes a fixed table of named entities followed by decimal and hexadecimal
numeric entities. Each named entity is replaced in its own whole-string pass,
in table order, so an escaped entity such as ``&amp;lt;`` decodes all the way
to ``<``.
"""

import re
import sys
from typing import List, Pattern, Tuple

# Order matters: each entry is applied to the output of the previous one.
NAMED_ENTITIES: Tuple[Tuple[str, str], ...] = (
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&quot;', '"'),
    ('&#39;', "'"),
    ('&apos;', "'"),
    ('&nbsp;', ' '),
    ('&copy;', '©'),
    ('&reg;', '®'),
    ('&trade;', '™'),
    ('&hellip;', '…'),
    ('&mdash;', '—'),
    ('&ndash;', '–'),
    ('&lsquo;', '‘'),
    ('&rsquo;', '’'),
    ('&ldquo;', '“'),
    ('&rdquo;', '”'),
)

_NAMED_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(re.escape(entity), re.IGNORECASE), char)
    for entity, char in NAMED_ENTITIES
]

_DECIMAL_ENTITY = re.compile(r'&#([0-9]+);')
_HEX_ENTITY = re.compile(r'&#x([0-9a-f]+);', re.IGNORECASE)

_SURROGATE_FIRST = 0xD800
_SURROGATE_LAST = 0xDFFF

# Digits needed to write sys.maxunicode (0x10FFFF) in each base
_MAX_DIGITS = {10: len(str(sys.maxunicode)), 16: len(f'{sys.maxunicode:x}')}


def _code_point_replacer(base: int):
    """Build a substitution callback mapping a numeric entity to its character."""
    max_digits = _MAX_DIGITS[base]

    def replace(match: 're.Match[str]') -> str:
        digits = match.group(1).lstrip('0') or '0'
        if len(digits) > max_digits:
            # Too large for any code point; also keeps int() within its digit limit
            return match.group(0)
        code_point = int(digits, base)
        if code_point > sys.maxunicode or _SURROGATE_FIRST <= code_point <= _SURROGATE_LAST:
            # Not a character; leave the entity as written
            return match.group(0)
        return chr(code_point)

    return replace


def decode_named_entities(text: str) -> str:
    """Replace the named entities of NAMED_ENTITIES, case-insensitively."""
    for pattern, char in _NAMED_PATTERNS:
        text = pattern.sub(char, text)
    return text


def decode_numeric_entities(text: str) -> str:
    """Replace ``&#NNN;`` then ``&#xHH;`` entities with their characters.

    Entities without a terminating semicolon or with a non-numeric body do
    not match and are passed through literally.
    """
    text = _DECIMAL_ENTITY.sub(_code_point_replacer(10), text)
    return _HEX_ENTITY.sub(_code_point_replacer(16), text)


def decode_entities(text: str) -> str:
    """Decode named entities, then decimal and hexadecimal numeric entities.

    Args:
        text: Raw HTML text

    Returns:
        Text with every recognized entity replaced by its character
    """
    if not text or '&' not in text:
        return text
    return decode_numeric_entities(decode_named_entities(text))
