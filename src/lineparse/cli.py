from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from lineparse import __version__
from lineparse.diagnostics import format_error_with_hint
from lineparse.errors import (
    ConfigError,
    RowValidationError,
    SchemaLoadError,
    SourceUnavailableError,
)

if TYPE_CHECKING:  # pragma: no cover
    from lineparse.config import LineparseConfig


EXIT_OK = 0
EXIT_CONFIG_OR_SCHEMA = 2
EXIT_SOURCE_UNAVAILABLE = 3
EXIT_VALIDATION_ERROR = 4

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        type=str,
        default=None,
        help="Directory to search upward from for lineparse.toml (defaults to cwd).",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to lineparse.toml (must exist when given).",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level for diagnostics on stderr.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lineparse", description="Parse comma-delimited files into rows or records."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_p = subparsers.add_parser("parse", help="Parse a file and print it as JSON.")
    _add_common_flags(parse_p)
    parse_p.add_argument("path", help="Input file.")
    parse_p.add_argument(
        "--schema",
        type=str,
        default=None,
        help="Validate rows with MODULE:ATTR (pydantic model, schema object or callable).",
    )
    parse_p.add_argument(
        "--format",
        dest="output_format",
        choices=("json", "jsonl"),
        default=None,
        help="Output format (defaults to output.format from config, else json).",
    )
    parse_p.add_argument("--encoding", type=str, default=None, help="Input file encoding.")

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> LineparseConfig:
    from lineparse.config import load_config

    root = Path(args.root).resolve() if args.root else None
    config_path = Path(args.config).resolve() if args.config else None
    return load_config(root=root, config_path=config_path)


def _prepend_sys_path(dirs: Sequence[Path]) -> None:
    # Schema modules usually live next to the data, not in site-packages.
    seen: set[str] = set(sys.path)
    for d in reversed([p.resolve() for p in dirs if p.exists()]):
        s = str(d)
        if s in seen:
            continue
        sys.path.insert(0, s)
        seen.add(s)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def cmd_parse(args: argparse.Namespace) -> int:
    from lineparse.output import render
    from lineparse.parser import parse
    from lineparse.schema import load_schema

    try:
        cfg = _load_config(args)

        schema: Any = None
        target = args.schema if args.schema is not None else cfg.schema.target
        if target:
            _prepend_sys_path([Path(args.root) if args.root else Path.cwd()])
            schema = load_schema(target)

        encoding = args.encoding or cfg.input.encoding
        fmt = args.output_format or cfg.output.format

        result = asyncio.run(parse(Path(args.path), schema, encoding=encoding))
    except (ConfigError, SchemaLoadError) as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_OR_SCHEMA
    except SourceUnavailableError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_SOURCE_UNAVAILABLE
    except RowValidationError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_VALIDATION_ERROR

    sys.stdout.write(render(result, fmt=fmt, indent=cfg.output.indent))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_CONFIG_OR_SCHEMA

    _configure_logging(args.log_level)

    if args.command == "parse":
        return cmd_parse(args)

    return EXIT_CONFIG_OR_SCHEMA


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
