"""Command line interface for the zalgo codec.

Turns printable ASCII text into a single grapheme cluster and back, either from
words given on the command line or from the contents of a file. Results are
printed to stdout unless ``--out-path`` is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .codec import zalgo_decode, zalgo_encode, zalgo_unwrap_python, zalgo_wrap_python
from .config import CodecConfig, ConfigurationError, load_codec_config
from .errors import ZalgoError
from .files import (
    OutputExistsError,
    ensure_writable,
    read_encoded,
    read_for_encoding,
    write_output,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def _add_source_parsers(parser: argparse.ArgumentParser, *, verb: str) -> None:
    sources = parser.add_subparsers(dest="source", required=True)

    text_parser = sources.add_parser("text", help=f"{verb} all text after the command")
    text_parser.add_argument("text", nargs="+", help=f"Text to {verb}")

    file_parser = sources.add_parser(
        "file",
        help=f"{verb} the contents of a file, ignoring carriage return characters",
    )
    file_parser.add_argument("path", type=Path, help="Path to the input file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zalgo-codec",
        description="Convert printable ASCII text into a single grapheme cluster and back",
    )
    parser.add_argument(
        "-o",
        "--out-path",
        type=Path,
        default=None,
        help=(
            "Save the result to this file instead of printing it. Useful when the "
            "terminal does not use UTF-8. Must come before the command"
        ),
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists (requires --out-path)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: ~/.zalgo_codec.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser(
        "encode",
        help="turn printable ASCII and newlines into a single grapheme cluster",
    )
    _add_source_parsers(encode_parser, verb="encode")

    decode_parser = subparsers.add_parser(
        "decode", help="turn an encoded grapheme cluster back into text"
    )
    _add_source_parsers(decode_parser, verb="decode")

    wrap_parser = subparsers.add_parser(
        "wrap", help="encode a python file into a script that decodes and runs itself"
    )
    wrap_parser.add_argument("path", type=Path, help="Python file to wrap")

    unwrap_parser = subparsers.add_parser(
        "unwrap", help="recover the python source from a wrapped script"
    )
    unwrap_parser.add_argument("path", type=Path, help="Wrapped python file")

    return parser


def cmd_encode(args: argparse.Namespace, config: CodecConfig) -> str:
    if args.source == "text":
        text = " ".join(args.text)
    else:
        text = read_for_encoding(args.path, config)
    return zalgo_encode(text)


def cmd_decode(args: argparse.Namespace, config: CodecConfig) -> str:
    if args.source == "text":
        if len(args.text) != 1:
            raise CLIError("can only decode one grapheme cluster at a time")
        encoded = args.text[0]
    else:
        encoded = read_encoded(args.path, config)
    return zalgo_decode(encoded)


def cmd_wrap(args: argparse.Namespace, config: CodecConfig) -> str:
    return zalgo_wrap_python(read_for_encoding(args.path, config))


def cmd_unwrap(args: argparse.Namespace, config: CodecConfig) -> str:
    return zalgo_unwrap_python(read_encoded(args.path, config))


def _print_output(output: str) -> None:
    try:
        print(output)
    except UnicodeEncodeError as exc:
        raise CLIError(
            f"the terminal can not display the result ({exc.encoding} output), "
            "use --out-path to save it to a file instead"
        ) from exc


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.force and args.out_path is None:
            raise CLIError("--force can only be used together with --out-path")

        config = load_codec_config(
            config_path=args.config,
            overrides={"force": True} if args.force else None,
        )
        logging.getLogger().setLevel(config.log_level)

        if args.out_path is not None:
            ensure_writable(args.out_path, force=config.force)

        if args.command == "encode":
            output = cmd_encode(args, config)
        elif args.command == "decode":
            output = cmd_decode(args, config)
        elif args.command == "wrap":
            output = cmd_wrap(args, config)
        elif args.command == "unwrap":
            output = cmd_unwrap(args, config)
        else:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")

        if args.out_path is not None:
            write_output(args.out_path, output, force=config.force)
            logger.info("Wrote result to %s", args.out_path)
        else:
            _print_output(output)
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
    except (
        CLIError,
        ConfigurationError,
        OutputExistsError,
        ZalgoError,
        OSError,
    ) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
