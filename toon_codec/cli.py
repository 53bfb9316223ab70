# -*- coding: utf-8 -*-
"""Location: ./toon_codec/cli.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

TOON command line tool.
This module provides CLI commands for converting between JSON and TOON:
- encode: JSON document to TOON
- decode: TOON document to JSON
- demo: round-trip a sample product store and print both forms

Input is read from a file or stdin and output written to a file or stdout.
Defaults for indentation, delimiter and strictness come from ``TOON_*``
environment variables (see ``toon_codec.config``).
"""

# Standard
import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional

# Third-Party
import orjson
from pydantic import ValidationError

# First-Party
from toon_codec import __version__
from toon_codec.config import get_settings
from toon_codec.converter import deserialize_object, deserialize_to_json, serialize_json, serialize_object
from toon_codec.demo import build_sample_store, StoreWrapper
from toon_codec.errors import ToonError
from toon_codec.options import DecodeOptions, EncodeOptions

logger = logging.getLogger(__name__)

# Delimiters that are awkward to type on a shell command line
_DELIMITER_ALIASES = {"tab": "\t", "\\t": "\t", "pipe": "|", "comma": ","}

_CLI_ERRORS = (ToonError, ValidationError, orjson.JSONDecodeError, OSError)


def _delimiter(value: str) -> str:
    """Resolve delimiter aliases from the command line.

    Args:
        value: Raw argument.

    Returns:
        Delimiter character.

    Examples:
        >>> _delimiter("tab") == "\\t"
        True
        >>> _delimiter("|")
        '|'
    """
    return _DELIMITER_ALIASES.get(value.lower(), value)


def _read_input(path: Optional[str]) -> str:
    """Read the input document.

    Args:
        path: File path, or None / "-" for stdin.

    Returns:
        Document text.
    """
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_output(text: str, path: Optional[str]) -> None:
    """Write the converted document with a trailing newline.

    Args:
        text: Document text.
        path: File path, or None for stdout.
    """
    if path is None:
        sys.stdout.write(text + "\n")
        return
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    logger.info(f"Wrote {len(text)} characters to {output}")


def encode_command(args: argparse.Namespace) -> None:
    """Execute the encode command.

    Args:
        args: Parsed command line arguments
    """
    settings = get_settings()
    try:
        options = EncodeOptions(
            indent=" " * (args.indent if args.indent is not None else settings.indent),
            delimiter=args.delimiter or settings.delimiter,
        )
        toon = serialize_json(_read_input(args.input), options)
        _write_output(toon, args.output)
    except _CLI_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def decode_command(args: argparse.Namespace) -> None:
    """Execute the decode command.

    Args:
        args: Parsed command line arguments
    """
    settings = get_settings()
    try:
        options = DecodeOptions(delimiter=args.delimiter or settings.delimiter, strict=args.strict or settings.strict)
        json_text = deserialize_to_json(_read_input(args.input), options, indent=args.pretty)
        _write_output(json_text, args.output)
    except _CLI_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def demo_command(_args: argparse.Namespace) -> None:
    """Encode the sample store, print TOON and JSON, then decode it back.

    Args:
        _args: Parsed command line arguments (unused)
    """
    data = build_sample_store()

    toon = serialize_object(data)
    json_text = data.model_dump_json(by_alias=True)

    print("TOON:")
    print(toon)
    print("*" * 18)
    print("json:")
    print(json_text)
    print("*" * 18)

    decoded = deserialize_object(toon, StoreWrapper)
    print()
    print(f"Decoded products: {len(decoded.store.products)}")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the TOON commands.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(prog="toon-codec", description="Convert between JSON and TOON")

    parser.add_argument("--version", "-V", action="version", version=f"toon-codec {__version__}")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], type=str.upper, help="Logging level (default: TOON_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Encode command
    encode_parser = subparsers.add_parser("encode", help="Convert JSON to TOON")
    encode_parser.add_argument("input", nargs="?", help="JSON input file (default: stdin)")
    encode_parser.add_argument("--output", "-o", help="Output file path (default: stdout)")
    encode_parser.add_argument("--indent", type=int, help="Spaces per indentation level (default: TOON_INDENT or 2)")
    encode_parser.add_argument("--delimiter", "-d", type=_delimiter, help="Array delimiter, or tab/pipe/comma (default: TOON_DELIMITER or ',')")
    encode_parser.set_defaults(func=encode_command)

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Convert TOON to JSON")
    decode_parser.add_argument("input", nargs="?", help="TOON input file (default: stdin)")
    decode_parser.add_argument("--output", "-o", help="Output file path (default: stdout)")
    decode_parser.add_argument("--delimiter", "-d", type=_delimiter, help="Array delimiter, or tab/pipe/comma (default: TOON_DELIMITER or ',')")
    decode_parser.add_argument("--strict", action="store_true", help="Reject padded/truncated rows and unterminated quotes")
    decode_parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    decode_parser.set_defaults(func=decode_command)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Round-trip a sample product store")
    demo_parser.set_defaults(func=demo_command)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format=settings.log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
