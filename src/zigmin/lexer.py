"""Zig lexer: converts source text into a stream of categorised tokens.

Follows the token rules of ``std.zig.Tokenizer``: whitespace and plain line
comments are skipped, doc comments are kept as tokens, and anything that does
not lex becomes an ``INVALID`` token instead of stopping the lexer.
"""

from __future__ import annotations

from collections.abc import Iterator

from zigmin.tokens import (
    KEYWORDS,
    Position,
    Span,
    Token,
    TokenType,
    is_control_char,
    is_hex_digit,
    is_ident_char,
    is_ident_start,
)

_SINGLE: dict[str, TokenType] = {
    "(": TokenType.L_PAREN,
    ")": TokenType.R_PAREN,
    "[": TokenType.L_BRACKET,
    "]": TokenType.R_BRACKET,
    "{": TokenType.L_BRACE,
    "}": TokenType.R_BRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "?": TokenType.QUESTION_MARK,
    "~": TokenType.TILDE,
}

# Multi-character capable operators, matched longest first.
_OPERATORS: dict[str, TokenType] = {
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "|": TokenType.PIPE,
    "||": TokenType.PIPE_PIPE,
    "|=": TokenType.PIPE_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    "=>": TokenType.EQUAL_ANGLE_BRACKET_RIGHT,
    "%": TokenType.PERCENT,
    "%=": TokenType.PERCENT_EQUAL,
    "*": TokenType.ASTERISK,
    "*=": TokenType.ASTERISK_EQUAL,
    "**": TokenType.ASTERISK_ASTERISK,
    "*%": TokenType.ASTERISK_PERCENT,
    "*%=": TokenType.ASTERISK_PERCENT_EQUAL,
    "*|": TokenType.ASTERISK_PIPE,
    "*|=": TokenType.ASTERISK_PIPE_EQUAL,
    "+": TokenType.PLUS,
    "++": TokenType.PLUS_PLUS,
    "+=": TokenType.PLUS_EQUAL,
    "+%": TokenType.PLUS_PERCENT,
    "+%=": TokenType.PLUS_PERCENT_EQUAL,
    "+|": TokenType.PLUS_PIPE,
    "+|=": TokenType.PLUS_PIPE_EQUAL,
    "-": TokenType.MINUS,
    "-=": TokenType.MINUS_EQUAL,
    "->": TokenType.ARROW,
    "-%": TokenType.MINUS_PERCENT,
    "-%=": TokenType.MINUS_PERCENT_EQUAL,
    "-|": TokenType.MINUS_PIPE,
    "-|=": TokenType.MINUS_PIPE_EQUAL,
    "<": TokenType.ANGLE_BRACKET_LEFT,
    "<=": TokenType.ANGLE_BRACKET_LEFT_EQUAL,
    "<<": TokenType.ANGLE_BRACKET_ANGLE_BRACKET_LEFT,
    "<<=": TokenType.ANGLE_BRACKET_ANGLE_BRACKET_LEFT_EQUAL,
    "<<|": TokenType.ANGLE_BRACKET_ANGLE_BRACKET_LEFT_PIPE,
    "<<|=": TokenType.ANGLE_BRACKET_ANGLE_BRACKET_LEFT_PIPE_EQUAL,
    ">": TokenType.ANGLE_BRACKET_RIGHT,
    ">=": TokenType.ANGLE_BRACKET_RIGHT_EQUAL,
    ">>": TokenType.ANGLE_BRACKET_ANGLE_BRACKET_RIGHT,
    ">>=": TokenType.ANGLE_BRACKET_ANGLE_BRACKET_RIGHT_EQUAL,
    "^": TokenType.CARET,
    "^=": TokenType.CARET_EQUAL,
    "&": TokenType.AMPERSAND,
    "&=": TokenType.AMPERSAND_EQUAL,
    ".": TokenType.PERIOD,
    ".*": TokenType.PERIOD_ASTERISK,
    ".**": TokenType.INVALID_PERIODASTERISKS,
    "..": TokenType.ELLIPSIS2,
    "...": TokenType.ELLIPSIS3,
    "/": TokenType.SLASH,
    "/=": TokenType.SLASH_EQUAL,
}
_MAX_OPERATOR_LEN = max(len(op) for op in _OPERATORS)

_WHITESPACE = " \t\r\n"

_DIGITS = {
    2: "01",
    8: "01234567",
    10: "0123456789",
    16: "0123456789abcdefABCDEF",
}
_BASE_PREFIXES = {"x": 16, "o": 8, "b": 2}


def _is_digit(ch: str, base: int) -> bool:
    return ch != "" and ch in _DIGITS[base]


class Lexer:
    """Pull tokens one at a time from Zig source text."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        # A leading byte order mark is not part of the source
        if source.startswith("\ufeff"):
            self._pos = 1

    def next(self) -> Token:
        """Return the next token; EOF is returned on every call once reached."""
        self._skip_trivia()
        if self._pos >= len(self._source):
            pos = self._current_pos()
            return Token(TokenType.EOF, "", Span(pos, pos))

        start = self._current_pos()
        ch = self._peek()

        if is_ident_start(ch):
            return self._lex_identifier(start)
        if "0" <= ch <= "9":
            return self._lex_number(start)
        if ch == '"':
            return self._lex_string(start, TokenType.STRING_LITERAL)
        if ch == "'":
            return self._lex_char_literal(start)
        if ch == "@":
            return self._lex_at(start)
        if ch == "\\":
            return self._lex_multiline_string_line(start)
        if ch == "/" and self._peek(1) == "/":
            return self._lex_doc_comment(start)
        if ch in _SINGLE:
            self._advance()
            return self._make(_SINGLE[ch], start)
        return self._lex_operator(start)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next()
            yield tok
            if tok.type == TokenType.EOF:
                return

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _make(self, tt: TokenType, start: Position) -> Token:
        end = self._current_pos()
        return Token(tt, self._source[start.offset : end.offset], Span(start, end))

    def _invalid(self, start: Position) -> Token:
        # Always make progress, even when the failure is on the first character.
        if self._pos == start.offset:
            self._advance()
        return self._make(TokenType.INVALID, start)

    # ------------------------------------------------------------------
    # Trivia: whitespace and plain // comments
    # ------------------------------------------------------------------

    def _skip_trivia(self) -> None:
        while self._pos < len(self._source):
            ch = self._peek()
            if ch in _WHITESPACE:
                self._advance()
            elif ch == "/" and self._peek(1) == "/" and not self._at_doc_comment():
                while self._pos < len(self._source) and self._peek() != "\n":
                    self._advance()
            else:
                return

    def _at_doc_comment(self) -> bool:
        third = self._peek(2)
        if third == "!":
            return True
        return third == "/" and self._peek(3) != "/"

    def _lex_doc_comment(self, start: Position) -> Token:
        tt = TokenType.CONTAINER_DOC_COMMENT if self._peek(2) == "!" else TokenType.DOC_COMMENT
        while self._pos < len(self._source) and self._peek() != "\n":
            self._advance()
        return self._make(tt, start)

    # ------------------------------------------------------------------
    # Identifiers, keywords, builtins
    # ------------------------------------------------------------------

    def _lex_identifier(self, start: Position) -> Token:
        while is_ident_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]
        return self._make(KEYWORDS.get(text, TokenType.IDENTIFIER), start)

    def _lex_at(self, start: Position) -> Token:
        self._advance()  # consume @
        if self._peek() == '"':
            return self._lex_string(start, TokenType.IDENTIFIER)
        if is_ident_start(self._peek()):
            while is_ident_char(self._peek()):
                self._advance()
            return self._make(TokenType.BUILTIN, start)
        return self._invalid(start)

    # ------------------------------------------------------------------
    # String and character literals
    # ------------------------------------------------------------------

    def _lex_string(self, start: Position, tt: TokenType) -> Token:
        self._advance()  # opening quote
        while True:
            ch = self._peek()
            if ch == "" or ch == "\n" or is_control_char(ch):
                return self._invalid(start)
            self._advance()
            if ch == '"':
                return self._make(tt, start)
            if ch == "\\":
                if self._peek() in ("", "\n") or is_control_char(self._peek()):
                    return self._invalid(start)
                self._advance()

    def _lex_multiline_string_line(self, start: Position) -> Token:
        self._advance()
        if self._peek() != "\\":
            return self._invalid(start)
        while self._pos < len(self._source):
            if self._advance() == "\n":
                break
        return self._make(TokenType.MULTILINE_STRING_LITERAL_LINE, start)

    def _lex_char_literal(self, start: Position) -> Token:
        self._advance()  # opening quote
        ch = self._peek()
        if ch in ("", "\n", "'") or is_control_char(ch):
            return self._invalid(start)
        self._advance()
        if ch == "\\" and not self._lex_char_escape():
            return self._invalid(start)
        if self._peek() != "'":
            return self._invalid(start)
        self._advance()
        return self._make(TokenType.CHAR_LITERAL, start)

    def _lex_char_escape(self) -> bool:
        """Consume the body of an escape after the backslash; False if malformed."""
        ch = self._peek()
        if ch in ("", "\n") or is_control_char(ch):
            return False
        self._advance()
        if ch == "x":
            for _ in range(2):
                if not is_hex_digit(self._peek()):
                    return False
                self._advance()
            return True
        if ch == "u":
            if self._peek() != "{":
                return False
            self._advance()
            digits = 0
            while is_hex_digit(self._peek()):
                self._advance()
                digits += 1
            if self._peek() != "}" or digits == 0:
                return False
            self._advance()
        return True

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number(self, start: Position) -> Token:
        base = 10
        if self._peek() == "0" and self._peek(1) in _BASE_PREFIXES:
            base = _BASE_PREFIXES[self._peek(1)]
            self._advance()
            self._advance()

        tt = TokenType.INTEGER_LITERAL
        ok = self._consume_digits(base)

        if self._peek() == "." and base in (10, 16) and _is_digit(self._peek(1), base):
            self._advance()
            tt = TokenType.FLOAT_LITERAL
            ok = self._consume_digits(base) and ok

        exponent = {10: "eE", 16: "pP"}.get(base, "")
        if self._peek() != "" and self._peek() in exponent:
            self._advance()
            tt = TokenType.FLOAT_LITERAL
            if self._peek() in ("+", "-"):
                self._advance()
            ok = self._consume_digits(10) and ok

        # A literal that runs straight into letters (e.g. 0b102, 12ab) does not lex
        if is_ident_char(self._peek()):
            ok = False
            while is_ident_char(self._peek()):
                self._advance()

        if not ok:
            return self._invalid(start)
        return self._make(tt, start)

    def _consume_digits(self, base: int) -> bool:
        """Consume a digit run with ``_`` separators; False if empty or misplaced ``_``."""
        begin = self._pos
        while _is_digit(self._peek(), base) or self._peek() == "_":
            self._advance()
        digits = self._source[begin : self._pos]
        return (
            digits != ""
            and not digits.startswith("_")
            and not digits.endswith("_")
            and "__" not in digits
        )

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _lex_operator(self, start: Position) -> Token:
        for length in range(_MAX_OPERATOR_LEN, 0, -1):
            text = self._source[self._pos : self._pos + length]
            tt = _OPERATORS.get(text)
            if tt is not None:
                for _ in range(len(text)):
                    self._advance()
                return self._make(tt, start)
        return self._invalid(start)


def tokenize(source: str) -> list[Token]:
    """Tokenize the full source and return the token list, ending with EOF."""
    return list(Lexer(source))


def describe_invalid(token: Token) -> str:
    """Return a short human-readable reason for an invalid token."""
    text = token.text
    first = text[:1]
    if first == '"' or text.startswith('@"'):
        return "invalid or unterminated string literal"
    if first == "'":
        return "invalid character literal"
    if first.isdigit():
        return f"invalid number literal '{text}'"
    if first == "\\":
        return "expected '\\\\' to start a multiline string line"
    if first == "@":
        return "expected a builtin name or string after '@'"
    return f"unexpected character {first!r}"
