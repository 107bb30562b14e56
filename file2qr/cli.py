"""Command line interface: read input, build the QR code, deliver it."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, TextIO

from . import PROGRAM_NAME, __version__
from .config import CAPACITY_HINT_THRESHOLD, DEFAULT_RENDERER, DEFAULT_SIZE, DEFAULT_TERM_SIZE, Config
from .content import prepare, read_input
from .errors import CapacityError, File2QRError, OutputError, RenderError
from .symbol import generate
from .terminal import RENDERERS, display, get_renderer

logger = logging.getLogger(__name__)

VERSION_TEXT = f"""\
{PROGRAM_NAME} {__version__}
Copyright (C) 2025 file2qr contributors
License GPLv3+: GNU GPL version 3 or later <https://gnu.org/licenses/gpl.html>.
This is free software: you are free to change and redistribute it.
There is NO WARRANTY, to the extent permitted by law."""

EPILOG = f"""\
If FILE is not specified, {PROGRAM_NAME} reads from standard input.
If -o/--output is not specified, displays QR code in terminal."""


def setup_logging(stream: TextIO) -> None:
    """Send diagnostics to *stream*; informational ones only when it is a terminal."""

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(PROGRAM_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO if stream.isatty() else logging.WARNING)
    package_logger.propagate = False


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("Size must be a positive integer")
    return number


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Convert files to QR codes.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        metavar="FILE",
        nargs="*",
        type=Path,
        help="File to encode; when several are given the last one is used (default: stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output QR code file path (PNG format)",
    )
    parser.add_argument(
        "-s",
        "--size",
        type=positive_int,
        default=DEFAULT_SIZE,
        help=f"QR code size in pixels (default: {DEFAULT_SIZE})",
    )
    parser.add_argument(
        "-t",
        "--term-size",
        dest="term_size",
        type=positive_int,
        default=DEFAULT_TERM_SIZE,
        help=f"Size of QR code when displayed in terminal (default: {DEFAULT_TERM_SIZE})",
    )
    parser.add_argument(
        "-r",
        "--recovery",
        default="medium",
        help="QR code recovery level: low, medium, high, highest (default: medium)",
    )
    parser.add_argument(
        "-b",
        "--base64",
        action="store_true",
        help="Base64 encode content (recommended for binary files)",
    )
    parser.add_argument(
        "--renderer",
        choices=sorted(RENDERERS),
        default=DEFAULT_RENDERER,
        help=(
            "How to draw the QR code in the terminal: 'truecolor' uses 24-bit colours, "
            "'glyph' uses block characters only (default: truecolor)"
        ),
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=VERSION_TEXT,
        help="Display version information and exit",
    )
    return parser


def run(config: Config, stdin: Optional[BinaryIO] = None, stdout: Optional[TextIO] = None) -> int:
    """Execute the whole pipeline and return the process exit status."""

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout

    try:
        payload = prepare(read_input(config.input_path, stdin), config.base64)

        try:
            symbol = generate(payload.data, config.recovery)
        except CapacityError as exc:
            logger.error(str(exc))
            if exc.payload_size > CAPACITY_HINT_THRESHOLD:
                logger.error(f"Content size ({exc.payload_size} bytes) might be too large for a QR code.")
                logger.error("Try reducing file size or using the -b/--base64 option for binary files.")
            return 1

        if not config.to_terminal:
            saved_path = symbol.save(config.output_path, config.size)
            logger.info(f"QR code saved to: {saved_path}")
            return 0

        if not stdout.isatty():
            raise OutputError("Error: Output is not a terminal. Use -o/--output to specify an output file.")

        display(symbol, config.term_size, get_renderer(config.renderer), stdout)
    except RenderError as exc:
        logger.error(f"Error displaying QR code: {exc}")
        return 1
    except File2QRError as exc:
        logger.error(str(exc))
        return 1

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(sys.stderr)
    return run(Config.from_args(args))


if __name__ == "__main__":
    sys.exit(main())
