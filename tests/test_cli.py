"""Tests for the CLI module: arg parsing, exit codes, stdin/stdout, end-to-end."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from zigmin.cli import (
    DEFAULT_MAX_SIZE,
    CliOptions,
    build_parser,
    main,
    minify_source,
    read_limited,
)
from zigmin.errors import SourceTooLargeError

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_defaults(self) -> None:
        ns = build_parser().parse_args([])
        assert ns.input == "-"
        assert ns.output is None
        assert ns.reserve == []
        assert ns.pointer_width is None

    def test_input_and_output(self) -> None:
        ns = build_parser().parse_args(["golf.zig", "-o", "out.zig"])
        assert ns.input == "golf.zig"
        assert ns.output == "out.zig"

    def test_reserve_flags(self) -> None:
        ns = build_parser().parse_args(["golf.zig", "-r", "a", "--reserve", "b"])
        assert ns.reserve == ["a", "b"]

    def test_pointer_width_choices(self) -> None:
        p = build_parser()
        assert p.parse_args(["--pointer-width", "64"]).pointer_width == 64
        with pytest.raises(SystemExit):
            p.parse_args(["--pointer-width", "16"])

    def test_boolean_flags(self) -> None:
        ns = build_parser().parse_args(["--stats", "--debug"])
        assert ns.stats is True
        assert ns.debug is True


# ---------------------------------------------------------------------------
# Size limit
# ---------------------------------------------------------------------------


class TestReadLimited:
    def test_within_limit(self) -> None:
        assert read_limited(io.BytesIO(b"abc"), 3) == b"abc"

    def test_over_limit(self) -> None:
        with pytest.raises(SourceTooLargeError):
            read_limited(io.BytesIO(b"abcd"), 3)


# ---------------------------------------------------------------------------
# minify_source with options
# ---------------------------------------------------------------------------


def _options(**overrides) -> CliOptions:
    fields = dict(
        input_file=None,
        output_file=None,
        reserved=[],
        pointer_width=None,
        max_size=DEFAULT_MAX_SIZE,
        stats=False,
        debug=False,
    )
    fields.update(overrides)
    return CliOptions(**fields)


class TestMinifySource:
    def test_plain(self) -> None:
        assert minify_source("const x = 1;", _options()) == "const a=1;"

    def test_pointer_width(self) -> None:
        out = minify_source("var n: usize = 0;", _options(pointer_width=64))
        assert out == "var a:u64=0;"

    def test_reserved(self) -> None:
        out = minify_source("const keep = 1;", _options(reserved=["keep"]))
        assert out == "const keep=1;"

    def test_stats(self, capsys) -> None:
        minify_source("const x = 1;", _options(stats=True))
        assert "12 -> 10 bytes (saved 2)" in capsys.readouterr().err

    def test_debug(self, capsys) -> None:
        minify_source("const value = 1;", _options(debug=True))
        err = capsys.readouterr().err
        assert "1:1 KEYWORD_CONST 'const'" in err
        assert "1:7 IDENTIFIER 'value'" in err
        assert "value -> a" in err
        assert "main -> main" not in err


# ---------------------------------------------------------------------------
# main() exit codes and I/O
# ---------------------------------------------------------------------------


class TestMain:
    def test_file_to_stdout(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "golf.zig"
        src.write_text("const x = 'A';\n")
        assert main([str(src)]) == 0
        assert capsys.readouterr().out == "const a=65;"

    def test_file_to_file(self, tmp_path: Path) -> None:
        src = tmp_path / "golf.zig"
        src.write_text("const x = 1;")
        out = tmp_path / "out.zig"
        assert main([str(src), "-o", str(out)]) == 0
        assert out.read_text() == "const a=1;"

    def test_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"const _ = main;")))
        assert main([]) == 0
        assert capsys.readouterr().out == "const _=main;"

    def test_invalid_source_exit_1(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "bad.zig"
        src.write_text("const x = $;")
        assert main([str(src)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error:" in captured.err
        assert f"{src}:1:11" in captured.err

    def test_invalid_source_no_output_file(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.zig"
        src.write_text("const x = $;")
        out = tmp_path / "out.zig"
        assert main([str(src), "-o", str(out)]) == 1
        assert not out.exists()

    def test_missing_file_exit_2(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.zig")]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_too_large_exit_2(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "big.zig"
        src.write_text("const x = 1;")
        assert main([str(src), "--max-size", "5"]) == 2
        assert "larger than 5 bytes" in capsys.readouterr().err

    def test_non_utf8_exit_2(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "latin.zig"
        src.write_bytes(b"const x = '\xe9';")
        assert main([str(src)]) == 2
        assert "UTF-8" in capsys.readouterr().err

    def test_bad_config_exit_2(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "golf.zig"
        src.write_text("const x = 1;")
        (tmp_path / "zigmin.toml").write_text("[rename\n")
        assert main([str(src)]) == 2
        assert "config" in capsys.readouterr().err


class TestDebugStream:
    def test_dump_follows_current_stderr(self, monkeypatch) -> None:
        from zigmin.debug import dump_renames, dump_tokens
        from zigmin.lexer import tokenize

        first = io.StringIO()
        monkeypatch.setattr(sys, "stderr", first)
        dump_tokens(tokenize("x"))
        second = io.StringIO()
        monkeypatch.setattr(sys, "stderr", second)
        dump_tokens(tokenize("y"))
        dump_renames({"y": "a"})

        assert "'x'" in first.getvalue()
        assert "'y'" in second.getvalue()
        assert "y -> a" in second.getvalue()
        assert "'y'" not in first.getvalue()
