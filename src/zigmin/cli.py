"""Command-line interface for zigmin."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

from zigmin.errors import LexError, SourceTooLargeError
from zigmin.renamer import POINTER_WIDTH_ALIASES

DEFAULT_MAX_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    reserved: list[str]
    pointer_width: int | None
    max_size: int
    stats: bool
    debug: bool

    @property
    def display_name(self) -> str:
        return str(self.input_file) if self.input_file is not None else "<stdin>"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="zigmin",
        description="Minify Zig source for code golf",
    )
    p.add_argument("input", nargs="?", default="-", help="Input .zig file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover zigmin.toml)",
    )
    p.add_argument(
        "-r",
        "--reserve",
        action="append",
        default=[],
        metavar="NAME",
        help="Identifier to leave unrenamed (repeatable)",
    )
    p.add_argument(
        "--pointer-width",
        type=int,
        choices=sorted(POINTER_WIDTH_ALIASES),
        default=None,
        help="Rewrite isize/usize to the fixed-width type for this target",
    )
    p.add_argument(
        "--max-size",
        type=int,
        default=None,
        metavar="BYTES",
        help=f"Largest accepted input (default: {DEFAULT_MAX_SIZE})",
    )
    p.add_argument("--stats", action="store_true", help="Report size savings to stderr")
    p.add_argument(
        "--debug", action="store_true", help="Dump tokens and renames to stderr"
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "zigmin.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Reserved names: config + CLI
    reserved: list[str] = []
    pointer_width: int | None = None
    cfg_rename = config.get("rename")
    if isinstance(cfg_rename, dict):
        cfg_reserved = cfg_rename.get("reserved")
        if isinstance(cfg_reserved, list):
            reserved.extend(str(name) for name in cfg_reserved)
        cfg_width = cfg_rename.get("pointer_width")
        if isinstance(cfg_width, int):
            if cfg_width not in POINTER_WIDTH_ALIASES:
                raise argparse.ArgumentTypeError(
                    f"unsupported pointer_width in config: {cfg_width}"
                )
            pointer_width = cfg_width
    reserved.extend(args.reserve)

    # Pointer width: config < CLI
    if args.pointer_width is not None:
        pointer_width = args.pointer_width

    # Input size limit: config < CLI
    max_size = DEFAULT_MAX_SIZE
    cfg_input = config.get("input")
    if isinstance(cfg_input, dict):
        cfg_max = cfg_input.get("max_size")
        if isinstance(cfg_max, int):
            max_size = cfg_max
    if args.max_size is not None:
        max_size = args.max_size
    if max_size <= 0:
        raise argparse.ArgumentTypeError(f"max size must be positive: {max_size}")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        reserved=reserved,
        pointer_width=pointer_width,
        max_size=max_size,
        stats=args.stats,
        debug=args.debug,
    )


def read_limited(stream: BinaryIO, limit: int) -> bytes:
    """Read all of *stream*, failing if it holds more than *limit* bytes."""
    data = stream.read(limit + 1)
    if len(data) > limit:
        raise SourceTooLargeError(len(data), limit)
    return data


def read_source(options: CliOptions) -> str:
    """Read and decode the input named by *options*."""
    if options.input_file is None:
        data = read_limited(sys.stdin.buffer, options.max_size)
    else:
        with open(options.input_file, "rb") as f:
            data = read_limited(f, options.max_size)
    return data.decode("utf-8")


def minify_source(source: str, options: CliOptions) -> str:
    """Minify already-read source according to *options*."""
    from zigmin.debug import dump_renames, dump_tokens
    from zigmin.lexer import tokenize
    from zigmin.minifier import Minifier
    from zigmin.renamer import Renamer

    if options.debug:
        dump_tokens(tokenize(source))

    aliases = POINTER_WIDTH_ALIASES.get(options.pointer_width) if options.pointer_width else None
    renamer = Renamer(reserved=options.reserved, aliases=aliases)
    result = Minifier(source, renamer).run()

    if options.debug:
        dump_renames(renamer.renames)
    if options.stats:
        before = len(source.encode("utf-8"))
        after = len(result.encode("utf-8"))
        print(f"{before} -> {after} bytes (saved {before - after})", file=sys.stderr)
    return result


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        source = read_source(options)
    except OSError as exc:
        print(f"error: cannot read {options.display_name}: {exc.strerror}", file=sys.stderr)
        return 2
    except SourceTooLargeError as exc:
        print(f"error: {options.display_name}: {exc}", file=sys.stderr)
        return 2
    except UnicodeDecodeError:
        print(f"error: {options.display_name} is not valid UTF-8", file=sys.stderr)
        return 2

    try:
        result = minify_source(source, options)
    except LexError as exc:
        print(exc.format(options.display_name), file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)

    return 0
