"""QR symbol generation on top of the ``qrcode`` package."""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Tuple

from PIL import Image
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError
from qrcode.main import QRCode

from .errors import CapacityError, OutputError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]

BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)
TRANSPARENT: Color = (255, 255, 255, 0)

# Modules of blank space around the symbol required by the QR standard.
QUIET_ZONE = 4


class RecoveryLevel(Enum):
    """QR error correction tiers, from most capacity to most resilience."""

    LOW = ERROR_CORRECT_L  # 7% of codewords can be restored
    MEDIUM = ERROR_CORRECT_M  # 15%
    HIGH = ERROR_CORRECT_Q  # 25%
    HIGHEST = ERROR_CORRECT_H  # 30%


_RECOVERY_TOKENS = {level.name.lower(): level for level in RecoveryLevel}


def recovery_level(token: str) -> RecoveryLevel:
    """Map a case-insensitive level name to a :class:`RecoveryLevel`.

    Unknown names fall back to ``MEDIUM`` without raising.
    """

    level = _RECOVERY_TOKENS.get(token.lower())
    if level is None:
        logger.info(f"Unknown recovery level '{token}', using medium")
        return RecoveryLevel.MEDIUM
    return level


class Symbol:
    """A generated QR code that can be rasterised at any pixel size."""

    def __init__(self, qr: QRCode) -> None:
        self._qr = qr

    @property
    def version(self) -> int:
        return int(self._qr.version)

    @property
    def matrix(self) -> list[list[bool]]:
        """Module grid including the quiet zone."""
        return self._qr.get_matrix()

    def image(self, size: int, fill_color: Color = BLACK, back_color: Color = WHITE) -> Image.Image:
        """Return a ``size`` x ``size`` RGBA image of the symbol.

        Every module is drawn as a square of ``size // modules`` pixels and the
        symbol is centred; leftover pixels widen the margin. Sizes smaller than
        the module count are raised to it so each module keeps one pixel.
        """

        matrix = self.matrix
        modules = len(matrix)
        size = max(size, modules)
        module_size = size // modules
        margin = (size - modules * module_size) // 2

        canvas = Image.new("RGBA", (size, size), back_color)
        for row_index, row in enumerate(matrix):
            for col_index, cell in enumerate(row):
                if not cell:
                    continue
                left = margin + col_index * module_size
                top = margin + row_index * module_size
                canvas.paste(fill_color, (left, top, left + module_size, top + module_size))
        return canvas

    def save(self, path: Path, size: int) -> Path:
        """Write the symbol as a PNG file of ``size`` pixels."""

        try:
            self.image(size).convert("RGB").save(path, format="PNG")
        except OSError as exc:
            raise OutputError(f"Error saving QR code to file: {exc}") from exc
        return Path(path)


def generate(payload: bytes, level: RecoveryLevel = RecoveryLevel.MEDIUM) -> Symbol:
    """Encode *payload* choosing the smallest version that fits."""

    qr = QRCode(error_correction=level.value, box_size=1, border=QUIET_ZONE)
    qr.add_data(payload)

    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        # qrcode 8 rejects version 41 with a ValueError before DataOverflowError.
        raise CapacityError(
            f"Error generating QR code: content does not fit at {level.name.lower()} recovery level",
            len(payload),
        ) from exc

    logger.debug(f"Generated version {qr.version} symbol at {level.name.lower()} recovery level")
    return Symbol(qr)
