"""Identifier renaming: consistent short names for one minification run."""

from __future__ import annotations

import re
import string
from collections.abc import Iterable, Iterator, Mapping
from itertools import count, product
from types import MappingProxyType

from zigmin.tokens import KEYWORDS

# Order in which short names are handed out: a-z, then A-Z
SHORT_NAME_ALPHABET = string.ascii_lowercase + string.ascii_uppercase

# Names the language gives meaning to, which must never be remapped
PRIMITIVE_NAMES = (
    "isize",
    "usize",
    "f16",
    "f32",
    "f64",
    "f80",
    "f128",
    "bool",
    "void",
    "noreturn",
    "type",
    "anyerror",
    "anyopaque",
    "comptime_int",
    "comptime_float",
    "c_short",
    "c_ushort",
    "c_int",
    "c_uint",
    "c_long",
    "c_ulong",
    "c_longlong",
    "c_ulonglong",
    "c_longdouble",
    "c_char",
    "true",
    "false",
    "null",
    "undefined",
)

# The discard identifier and the program entry point
RESERVED_NAMES = ("_", "main", *PRIMITIVE_NAMES)

# isize/usize narrowed to their fixed-width spelling on a 64-bit target
POINTER_WIDTH_ALIASES: dict[int, dict[str, str]] = {
    32: {"isize": "i32", "usize": "u32"},
    64: {"isize": "i64", "usize": "u64"},
}

_ARBITRARY_INT = re.compile(r"[iu][0-9]+")


def is_arbitrary_int_type(name: str) -> bool:
    """Return True for sized integer type names like ``u8`` or ``i129``."""
    return _ARBITRARY_INT.fullmatch(name) is not None


def short_names() -> Iterator[str]:
    """Yield candidate names: single letters first, then longer combinations."""
    for length in count(1):
        for letters in product(SHORT_NAME_ALPHABET, repeat=length):
            yield "".join(letters)


class Renamer:
    """Map original identifiers to short names, consistently within one run.

    A fresh instance must be used for every run; the table and the name
    cursor are never shared between runs.
    """

    def __init__(
        self,
        reserved: Iterable[str] = (),
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._renames: dict[str, str] = {}
        for name in RESERVED_NAMES:
            self._renames[name] = name
        for name in reserved:
            self._renames[name] = name
        if aliases:
            self._renames.update(aliases)
        self._taken = set(self._renames.values())
        self._names = short_names()
        self._issued = 0

    @property
    def renames(self) -> Mapping[str, str]:
        """Read-only view of the rename table, reserved entries included."""
        return MappingProxyType(self._renames)

    @property
    def issued(self) -> int:
        """Number of short names handed out so far."""
        return self._issued

    def rename(self, name: str) -> str:
        """Return the short name for *name*, assigning one on first sight."""
        new_name = self._renames.get(name)
        if new_name is not None:
            return new_name

        # Every iN/uN spelling is a valid type, so pass it through untouched
        if is_arbitrary_int_type(name):
            return name

        new_name = self._next_name()
        self._renames[name] = new_name
        self._taken.add(new_name)
        return new_name

    def _next_name(self) -> str:
        for candidate in self._names:
            # Never hand out a keyword or a name that is already emitted verbatim
            if candidate in KEYWORDS or candidate in self._taken:
                continue
            self._issued += 1
            return candidate
        raise AssertionError("short name generator is infinite")
