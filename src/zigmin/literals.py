"""Compact re-encoding of character literals."""

from __future__ import annotations

ESCAPED_NEWLINE = "'\\n'"


def encode_char_literal(text: str) -> str:
    """Return the shortest spelling of a char literal's value.

    ``'A'`` becomes ``65`` and ``'\\n'`` becomes ``10``.  Other escapes and
    multi-byte characters are returned unchanged.
    """
    if text == ESCAPED_NEWLINE:
        return "10"
    if len(text) == 3 and text[1].isascii():
        return str(ord(text[1]))
    return text
