"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from zigmin.lexer import tokenize
from zigmin.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def token_types(source: str, *, drop_doc_comments: bool = False) -> list[TokenType]:
    """Return the token types of *source*, without EOF."""
    dropped = {TokenType.EOF}
    if drop_doc_comments:
        dropped |= {TokenType.DOC_COMMENT, TokenType.CONTAINER_DOC_COMMENT}
    return [t.type for t in tokenize(source) if t.type not in dropped]
