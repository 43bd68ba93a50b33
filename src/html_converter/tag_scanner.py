"""Left-to-right tag scanner for block line breaks and tag stripping.

A tag is ``<`` followed by at least one character and everything up to the
first ``>``. Quotes are not tracked, so a ``>`` inside an attribute value ends
the tag early: ``<div title="a>b">`` is read as the tag ``<div title="a>``
followed by the text ``b">``. An empty ``<>`` is not a tag, and text after a
``<`` with no later ``>`` is kept as written.

Block names must match the whole tag name, so ``<link>``, ``<thead>`` and
``<track>`` are not treated as ``li``, ``th`` or ``tr`` and are stripped
without a line break.
"""

import re
from typing import List, Optional

# Tags that introduce a line break in rendered layout
BLOCK_ELEMENTS = frozenset({
    'div', 'p', 'br',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'li', 'ul', 'ol',
    'blockquote', 'pre', 'hr',
    'table', 'tr', 'td', 'th',
    'section', 'article', 'header', 'footer', 'main', 'aside', 'nav',
})

_TAG_NAME = re.compile(r'[A-Za-z0-9_]+')
_WHITESPACE = re.compile(r'\s*')


def find_tag_end(text: str, start: int) -> Optional[int]:
    """Return the index just past the tag opened at ``text[start]``.

    Args:
        text: Text being scanned
        start: Index of a ``<`` character

    Returns:
        Index after the first ``>`` following ``start``, or None when the
        ``<`` is directly followed by ``>`` or is never closed
    """
    if text.startswith('>', start + 1):
        return None
    close = text.find('>', start + 1)
    if close == -1:
        return None
    return close + 1


def match_block_tag(text: str, start: int) -> Optional[int]:
    """Match an opening or closing block element tag at ``text[start]``.

    Opening tags may carry any attributes (``<p class="x">``, ``<br/>``,
    ``<br />``). Closing tags allow only whitespace after the name
    (``</p>``, ``</p >``). Names are compared case-insensitively and must
    end at a non-word character, so ``<pre>`` never matches ``p``.

    Returns:
        Index just past the matched tag, or None if no block tag starts here
    """
    closing = text.startswith('</', start)
    name_match = _TAG_NAME.match(text, start + 2 if closing else start + 1)
    if name_match is None or name_match.group(0).lower() not in BLOCK_ELEMENTS:
        return None

    if closing:
        after_space = _WHITESPACE.match(text, name_match.end()).end()
        if text.startswith('>', after_space):
            return after_space + 1
        return None

    close = text.find('>', name_match.end())
    return None if close == -1 else close + 1


def insert_block_line_breaks(text: str) -> str:
    """Replace every block element tag with a single newline.

    Every ``<`` is a candidate start, including one inside an unclosed
    non-block tag, so ``<a <p>`` becomes ``<a `` plus a newline. Tags that
    are not block elements are left for strip_tags.
    """
    last_close = text.rfind('>')
    pieces: List[str] = []
    literal_start = 0
    start = text.find('<')
    while start != -1 and start < last_close:
        end = match_block_tag(text, start)
        if end is None:
            start = text.find('<', start + 1)
            continue
        pieces.append(text[literal_start:start])
        pieces.append('\n')
        literal_start = end
        start = text.find('<', end)
    pieces.append(text[literal_start:])
    return ''.join(pieces)


def strip_tags(text: str) -> str:
    """Remove every ``<`` ... ``>`` span, whatever its tag name."""
    last_close = text.rfind('>')
    pieces: List[str] = []
    literal_start = 0
    start = text.find('<')
    while start != -1 and start < last_close:
        end = find_tag_end(text, start)
        if end is None:
            start = text.find('<', start + 1)
            continue
        pieces.append(text[literal_start:start])
        literal_start = end
        start = text.find('<', end)
    pieces.append(text[literal_start:])
    return ''.join(pieces)
