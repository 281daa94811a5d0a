"""Zig source minifier for code-golf submissions."""

from __future__ import annotations

__version__ = "0.1.0"


def minify(source: str) -> str:
    """Minify Zig source text with default settings."""
    from zigmin.minifier import minify as _minify

    return _minify(source)
