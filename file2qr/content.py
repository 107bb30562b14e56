"""Reading the input and deciding which bytes end up inside the QR code."""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from .errors import InputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Payload:
    """Bytes handed to the symbol generator together with their origin."""

    data: bytes
    original_size: int
    base64: bool = False

    def __len__(self) -> int:
        return len(self.data)


def read_input(path: Optional[Path], stdin: BinaryIO) -> bytes:
    """Return the full contents of *path*, or of *stdin* when no path is given."""

    if path is not None:
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise InputError(f"Error reading file: {exc}") from exc

    try:
        return stdin.read()
    except OSError as exc:
        raise InputError(f"Error reading from stdin: {exc}") from exc


def prepare(raw: bytes, use_base64: bool = False) -> Payload:
    """Build the payload for *raw* input.

    Without *use_base64* the bytes are passed through untouched, so text files
    keep their encoding and binary files are stored in QR byte mode as-is.
    With it, the standard padded Base64 alphabet is used, which makes the
    code readable by scanners that expect text.
    """

    logger.info(f"Read {len(raw)} bytes of input")
    if not use_base64:
        return Payload(raw, len(raw))

    encoded = base64.b64encode(raw)
    logger.info(f"Data encoded as Base64 (length: {len(encoded)} characters)")
    return Payload(encoded, len(raw), base64=True)
