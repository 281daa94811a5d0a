"""--debug token and rename-table dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import TextIO

from zigmin.renamer import RESERVED_NAMES
from zigmin.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO | None = None) -> None:
    """Print one ``line:col TYPE 'text'`` line per token to *file* (default stderr)."""
    out = file if file is not None else sys.stderr
    for tok in tokens:
        start = tok.span.start
        out.write(f"{start.line}:{start.column} {tok.type.name} {tok.text!r}\n")


def dump_renames(renames: Mapping[str, str], *, file: TextIO | None = None) -> None:
    """Print the renames assigned during a run, skipping untouched reserved names."""
    out = file if file is not None else sys.stderr
    reserved = set(RESERVED_NAMES)
    for name, new_name in renames.items():
        if name in reserved and name == new_name:
            continue
        out.write(f"{name} -> {new_name}\n")
