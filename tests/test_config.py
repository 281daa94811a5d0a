"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from zigmin.cli import DEFAULT_MAX_SIZE, build_parser, load_config, resolve_options


def _resolve(doc: Path, *extra: str):
    ns = build_parser().parse_args([str(doc), *extra])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[rename]\nreserved = ["x"]\n')
        result = load_config(cfg, tmp_path)
        assert result["rename"] == {"reserved": ["x"]}

    def test_auto_discover_zigmin_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "zigmin.toml"
        cfg.write_text("[input]\nmax_size = 10\n")
        result = load_config(None, tmp_path)
        assert result["input"] == {"max_size": 10}


class TestConfigMerge:
    def test_defaults_without_config(self, tmp_path: Path) -> None:
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        opts = _resolve(doc)
        assert opts.reserved == []
        assert opts.pointer_width is None
        assert opts.max_size == DEFAULT_MAX_SIZE

    def test_config_reserved_merged_with_cli(self, tmp_path: Path) -> None:
        (tmp_path / "zigmin.toml").write_text('[rename]\nreserved = ["alloc"]\n')
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        opts = _resolve(doc, "-r", "gpa")
        assert opts.reserved == ["alloc", "gpa"]

    def test_config_pointer_width(self, tmp_path: Path) -> None:
        (tmp_path / "zigmin.toml").write_text("[rename]\npointer_width = 64\n")
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        assert _resolve(doc).pointer_width == 64

    def test_cli_pointer_width_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "zigmin.toml").write_text("[rename]\npointer_width = 64\n")
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        assert _resolve(doc, "--pointer-width", "32").pointer_width == 32

    def test_unsupported_pointer_width(self, tmp_path: Path) -> None:
        (tmp_path / "zigmin.toml").write_text("[rename]\npointer_width = 16\n")
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        with pytest.raises(argparse.ArgumentTypeError):
            _resolve(doc)

    def test_config_max_size_and_cli_override(self, tmp_path: Path) -> None:
        (tmp_path / "zigmin.toml").write_text("[input]\nmax_size = 100\n")
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        assert _resolve(doc).max_size == 100
        assert _resolve(doc, "--max-size", "50").max_size == 50

    def test_non_positive_max_size(self, tmp_path: Path) -> None:
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        with pytest.raises(argparse.ArgumentTypeError):
            _resolve(doc, "--max-size", "0")

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[rename]\nreserved = ["k"]\n')
        doc = tmp_path / "golf.zig"
        doc.write_text("")
        assert _resolve(doc, "--config", str(cfg)).reserved == ["k"]
