"""Convenience entry point for running file2qr without CLI flags.

Update the configuration variables below to control which file is encoded and
whether the QR code is drawn in the terminal or written to a PNG file. When you
run ``main.py`` (for example from PyCharm) the script uses these values and
immediately produces the QR code.
"""

from __future__ import annotations

import sys
from pathlib import Path

from file2qr.cli import run, setup_logging
from file2qr.config import Config
from file2qr.symbol import recovery_level

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
# File whose contents should be encoded. ``None`` reads standard input.
INPUT_FILE = Path("README.md")

# Where to write the PNG. ``None`` draws the QR code in the terminal instead.
OUTPUT_FILE = None

# Pixel size of the PNG file.
OUTPUT_SIZE = 256

# Pixel size of the bitmap drawn in the terminal.
TERMINAL_SIZE = 40

# Error correction: low, medium, high or highest.
RECOVERY = "medium"

# Base64 encode the content first (recommended for binary files).
BASE64 = False

# Terminal drawing style: "truecolor" or "glyph".
RENDERER = "truecolor"


def main() -> int:
    """Run file2qr using the configuration specified above."""

    setup_logging(sys.stderr)
    config = Config(
        input_path=INPUT_FILE,
        output_path=OUTPUT_FILE,
        size=OUTPUT_SIZE,
        term_size=TERMINAL_SIZE,
        recovery=recovery_level(RECOVERY),
        base64=BASE64,
        renderer=RENDERER,
    )
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
