"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Lexer failures
    INVALID = auto()
    INVALID_PERIODASTERISKS = auto()  # .**

    # Names and literals
    IDENTIFIER = auto()  # foo, @"foo bar"
    BUILTIN = auto()  # @import
    STRING_LITERAL = auto()
    MULTILINE_STRING_LITERAL_LINE = auto()  # \\... up to and including \n
    CHAR_LITERAL = auto()
    INTEGER_LITERAL = auto()
    FLOAT_LITERAL = auto()

    # Comments that survive lexing
    DOC_COMMENT = auto()  # ///
    CONTAINER_DOC_COMMENT = auto()  # //!

    # Punctuation and operators
    BANG = auto()  # !
    PIPE = auto()  # |
    PIPE_PIPE = auto()  # ||
    PIPE_EQUAL = auto()  # |=
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    EQUAL_ANGLE_BRACKET_RIGHT = auto()  # =>
    BANG_EQUAL = auto()  # !=
    L_PAREN = auto()
    R_PAREN = auto()
    SEMICOLON = auto()
    PERCENT = auto()  # %
    PERCENT_EQUAL = auto()  # %=
    L_BRACE = auto()
    R_BRACE = auto()
    L_BRACKET = auto()
    R_BRACKET = auto()
    PERIOD = auto()  # .
    PERIOD_ASTERISK = auto()  # .*
    ELLIPSIS2 = auto()  # ..
    ELLIPSIS3 = auto()  # ...
    CARET = auto()  # ^
    CARET_EQUAL = auto()  # ^=
    PLUS = auto()  # +
    PLUS_PLUS = auto()  # ++
    PLUS_EQUAL = auto()  # +=
    PLUS_PERCENT = auto()  # +%
    PLUS_PERCENT_EQUAL = auto()  # +%=
    PLUS_PIPE = auto()  # +|
    PLUS_PIPE_EQUAL = auto()  # +|=
    MINUS = auto()  # -
    MINUS_EQUAL = auto()  # -=
    MINUS_PERCENT = auto()  # -%
    MINUS_PERCENT_EQUAL = auto()  # -%=
    MINUS_PIPE = auto()  # -|
    MINUS_PIPE_EQUAL = auto()  # -|=
    ASTERISK = auto()  # *
    ASTERISK_EQUAL = auto()  # *=
    ASTERISK_ASTERISK = auto()  # **
    ASTERISK_PERCENT = auto()  # *%
    ASTERISK_PERCENT_EQUAL = auto()  # *%=
    ASTERISK_PIPE = auto()  # *|
    ASTERISK_PIPE_EQUAL = auto()  # *|=
    ARROW = auto()  # ->
    COLON = auto()
    SLASH = auto()  # /
    SLASH_EQUAL = auto()  # /=
    COMMA = auto()
    AMPERSAND = auto()  # &
    AMPERSAND_EQUAL = auto()  # &=
    QUESTION_MARK = auto()
    ANGLE_BRACKET_LEFT = auto()  # <
    ANGLE_BRACKET_LEFT_EQUAL = auto()  # <=
    ANGLE_BRACKET_ANGLE_BRACKET_LEFT = auto()  # <<
    ANGLE_BRACKET_ANGLE_BRACKET_LEFT_EQUAL = auto()  # <<=
    ANGLE_BRACKET_ANGLE_BRACKET_LEFT_PIPE = auto()  # <<|
    ANGLE_BRACKET_ANGLE_BRACKET_LEFT_PIPE_EQUAL = auto()  # <<|=
    ANGLE_BRACKET_RIGHT = auto()  # >
    ANGLE_BRACKET_RIGHT_EQUAL = auto()  # >=
    ANGLE_BRACKET_ANGLE_BRACKET_RIGHT = auto()  # >>
    ANGLE_BRACKET_ANGLE_BRACKET_RIGHT_EQUAL = auto()  # >>=
    TILDE = auto()  # ~

    # Keywords
    KEYWORD_ADDRSPACE = auto()
    KEYWORD_ALIGN = auto()
    KEYWORD_ALLOWZERO = auto()
    KEYWORD_AND = auto()
    KEYWORD_ANYFRAME = auto()
    KEYWORD_ANYTYPE = auto()
    KEYWORD_ASM = auto()
    KEYWORD_ASYNC = auto()
    KEYWORD_AWAIT = auto()
    KEYWORD_BREAK = auto()
    KEYWORD_CALLCONV = auto()
    KEYWORD_CATCH = auto()
    KEYWORD_COMPTIME = auto()
    KEYWORD_CONST = auto()
    KEYWORD_CONTINUE = auto()
    KEYWORD_DEFER = auto()
    KEYWORD_ELSE = auto()
    KEYWORD_ENUM = auto()
    KEYWORD_ERRDEFER = auto()
    KEYWORD_ERROR = auto()
    KEYWORD_EXPORT = auto()
    KEYWORD_EXTERN = auto()
    KEYWORD_FN = auto()
    KEYWORD_FOR = auto()
    KEYWORD_IF = auto()
    KEYWORD_INLINE = auto()
    KEYWORD_NOALIAS = auto()
    KEYWORD_NOINLINE = auto()
    KEYWORD_NOSUSPEND = auto()
    KEYWORD_OPAQUE = auto()
    KEYWORD_OR = auto()
    KEYWORD_ORELSE = auto()
    KEYWORD_PACKED = auto()
    KEYWORD_PUB = auto()
    KEYWORD_RESUME = auto()
    KEYWORD_RETURN = auto()
    KEYWORD_LINKSECTION = auto()
    KEYWORD_STRUCT = auto()
    KEYWORD_SUSPEND = auto()
    KEYWORD_SWITCH = auto()
    KEYWORD_TEST = auto()
    KEYWORD_THREADLOCAL = auto()
    KEYWORD_TRY = auto()
    KEYWORD_UNION = auto()
    KEYWORD_UNREACHABLE = auto()
    KEYWORD_USINGNAMESPACE = auto()
    KEYWORD_VAR = auto()
    KEYWORD_VOLATILE = auto()
    KEYWORD_WHILE = auto()

    EOF = auto()


KEYWORDS: dict[str, TokenType] = {
    tt.name.removeprefix("KEYWORD_").lower(): tt
    for tt in TokenType
    if tt.name.startswith("KEYWORD_")
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with the exact source text it covers."""

    type: TokenType
    text: str
    span: Span


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return is_ident_start(ch) or ("0" <= ch <= "9")


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"


def is_control_char(ch: str) -> bool:
    """Return True for ASCII control characters other than newline."""
    return ch != "" and ch != "\n" and (ord(ch) < 0x20 or ch == "\x7f")
