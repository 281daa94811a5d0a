"""Decide where a separating space is required between two tokens."""

from __future__ import annotations

from zigmin.tokens import KEYWORDS, TokenType

# Categories that would merge into a different token when written back to back
SPACE_SENSITIVE: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.BUILTIN,
        TokenType.INTEGER_LITERAL,
        TokenType.FLOAT_LITERAL,
        *KEYWORDS.values(),
    }
)

# Operators starting with '*' that would turn a preceding .* into .**
_STAR_LED: frozenset[TokenType] = frozenset(
    {
        TokenType.ASTERISK,
        TokenType.ASTERISK_EQUAL,
        TokenType.ASTERISK_ASTERISK,
        TokenType.ASTERISK_PERCENT,
        TokenType.ASTERISK_PERCENT_EQUAL,
        TokenType.ASTERISK_PIPE,
        TokenType.ASTERISK_PIPE_EQUAL,
    }
)


def needs_space(prev: TokenType, cur: TokenType) -> bool:
    """Return True if a space must separate a *prev* token from a *cur* token."""
    # The @ sigil already separates a builtin from whatever precedes it
    if cur == TokenType.BUILTIN:
        return False
    if prev == TokenType.PERIOD_ASTERISK:
        return cur in _STAR_LED
    return prev in SPACE_SENSITIVE and cur in SPACE_SENSITIVE
