"""Token-stream rewriting: the minification pass over one source file."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TextIO

from zigmin.errors import LexError
from zigmin.lexer import Lexer, describe_invalid
from zigmin.literals import encode_char_literal
from zigmin.renamer import Renamer
from zigmin.spacing import needs_space
from zigmin.tokens import Token, TokenType

_DELETED = frozenset({TokenType.DOC_COMMENT, TokenType.CONTAINER_DOC_COMMENT})


class Minifier:
    """Rewrite one source file into its shortest equivalent spelling.

    Tokens are pulled from the lexer one at a time.  For each token the
    minifier decides whether a separating space is needed, then either
    copies the token, drops it (doc comments), renames it (identifiers not
    preceded by ``.``) or re-encodes it (char literals).  Output is buffered
    and only handed back once the whole file has been processed, so an
    invalid token never leaves partial output behind.
    """

    def __init__(
        self,
        source: str,
        renamer: Renamer | None = None,
    ) -> None:
        self._source = source
        self._lexer = Lexer(source)
        self._renamer = renamer if renamer is not None else Renamer()
        self._prev = TokenType.INVALID
        self._out: list[str] = []

    @property
    def renamer(self) -> Renamer:
        return self._renamer

    def run(self) -> str:
        """Process every token and return the minified source."""
        tok = self._lexer.next()
        while tok.type != TokenType.EOF:
            self._process(tok)
            tok = self._lexer.next()
        return "".join(self._out)

    def _process(self, tok: Token) -> None:
        tt = tok.type
        if tt == TokenType.INVALID:
            raise LexError(describe_invalid(tok), tok.span, self._source)

        text = self._rewrite(tok)
        # A char literal written as a decimal now spaces like any other integer
        if tt == TokenType.CHAR_LITERAL and text != tok.text:
            tt = TokenType.INTEGER_LITERAL

        if needs_space(self._prev, tt):
            self._out.append(" ")

        self._out.append(text)
        self._prev = tt

    def _rewrite(self, tok: Token) -> str:
        tt = tok.type
        if tt == TokenType.IDENTIFIER:
            # Field and declaration names after a period (std.mem) stay as they are
            if self._prev == TokenType.PERIOD:
                return tok.text
            return self._renamer.rename(tok.text)
        if tt in _DELETED:
            return ""
        if tt == TokenType.CHAR_LITERAL:
            return encode_char_literal(tok.text)
        return tok.text


def minify(
    source: str,
    *,
    reserved: Iterable[str] = (),
    aliases: Mapping[str, str] | None = None,
) -> str:
    """Minify Zig source text, starting from a fresh rename table."""
    renamer = Renamer(reserved=reserved, aliases=aliases)
    return Minifier(source, renamer).run()


def minify_to(
    source: str,
    sink: TextIO,
    *,
    reserved: Iterable[str] = (),
    aliases: Mapping[str, str] | None = None,
) -> None:
    """Minify *source* and write the result to *sink* only if it succeeds."""
    sink.write(minify(source, reserved=reserved, aliases=aliases))
