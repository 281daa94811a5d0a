"""Error types with formatted source context."""

from __future__ import annotations

from zigmin.tokens import Position, Span


class LexError(Exception):
    """Raised when the source contains a token that does not lex.

    The span covers the whole offending token, and ``format`` underlines
    all of it (up to the end of its first line).
    """

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        return self.span.start

    def _source_line(self) -> str:
        start = self.span.start.offset
        line_begin = self.source.rfind("\n", 0, start) + 1
        line_end = self.source.find("\n", start)
        if line_end == -1:
            line_end = len(self.source)
        text = self.source[line_begin:line_end].rstrip("\r")
        return text.removeprefix("\ufeff") if line_begin == 0 else text

    def format(self, filename: str = "input.zig") -> str:
        start, end = self.span.start, self.span.end
        text = self._source_line()

        if end.line == start.line:
            width = end.column - start.column
        else:
            width = len(text) - start.column + 1
        marker = " " * (start.column - 1) + "^" * max(1, width)

        gutter = " " * (len(str(start.line)) + 1)
        return "\n".join(
            [
                f"error: {self.message}",
                f"{gutter}--> {filename}:{start.line}:{start.column}",
                f"{gutter}|",
                f"{start.line} | {text}",
                f"{gutter}| {marker}",
            ]
        )


class SourceTooLargeError(Exception):
    """Raised when an input exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"input is larger than {limit} bytes")
