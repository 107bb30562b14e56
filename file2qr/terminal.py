"""Drawing QR bitmaps inside a text terminal with half-block characters.

A terminal cell is roughly twice as tall as it is wide, so every cell stands
for two vertically stacked pixels. Two strategies are available:

``truecolor``
    Paints the upper pixel with the foreground colour and the lower pixel with
    the background colour of an upper half block, using 24-bit ANSI escapes.

``glyph``
    Uses no colours at all and picks one of four glyphs from the alpha channel
    of the two pixels. Works on terminals with poor truecolor support.
"""
from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Protocol, TextIO, Type

from PIL import Image

from .errors import RenderError
from .symbol import TRANSPARENT, WHITE, Color, Symbol

logger = logging.getLogger(__name__)

UPPER_HALF_BLOCK = "▀"
LOWER_HALF_BLOCK = "▄"
FULL_BLOCK = "█"

RESET = "\x1b[0m"
PADDING = "  "


def row_pairs(height: int) -> range:
    """Top row index of every pixel pair; an odd last row has no partner and is skipped."""
    return range(0, height - 1, 2)


class Renderer(Protocol):
    """Turns a bitmap into terminal text."""

    #: Background the rasteriser should use for bitmaps fed to this renderer.
    back_color: Color

    def lines(self, image: Image.Image) -> Iterator[str]:
        """Yield one terminal line (without newline) per pixel row pair."""

    def render(self, image: Image.Image, out: TextIO) -> None:
        """Write the framed picture to *out*."""


class _BlockRenderer(ABC):
    back_color: Color = WHITE

    @abstractmethod
    def lines(self, image: Image.Image) -> Iterator[str]:
        """Yield one terminal line per pixel row pair."""

    def render(self, image: Image.Image, out: TextIO) -> None:
        # One write: a failure never leaves half a picture on screen.
        body = "".join(f"{line}\n" for line in self.lines(image))
        out.write(f"\n{body}\n")
        out.flush()


def truecolor_cell(top: tuple, bottom: tuple) -> str:
    """Escape sequences plus glyph for one cell: top pixel in front, bottom behind."""
    r1, g1, b1 = top[:3]
    r2, g2, b2 = bottom[:3]
    return f"\x1b[38;2;{r1};{g1};{b1}m\x1b[48;2;{r2};{g2};{b2}m{UPPER_HALF_BLOCK}"


class TruecolorRenderer(_BlockRenderer):
    """Upper half blocks coloured with the top and bottom pixel colours."""

    back_color = WHITE

    def lines(self, image: Image.Image) -> Iterator[str]:
        pixels = image.convert("RGB").load()
        width, height = image.size
        for y in row_pairs(height):
            cells = [truecolor_cell(pixels[x, y], pixels[x, y + 1]) for x in range(width)]
            # Reset before the newline so the last background colour does not bleed.
            yield PADDING + "".join(cells) + RESET


class GlyphRenderer(_BlockRenderer):
    """Colourless rendering; a pixel is ink when its alpha is non-zero."""

    back_color = TRANSPARENT

    GLYPHS = {
        (True, True): FULL_BLOCK,
        (True, False): UPPER_HALF_BLOCK,
        (False, True): LOWER_HALF_BLOCK,
        (False, False): " ",
    }

    def lines(self, image: Image.Image) -> Iterator[str]:
        alpha = image.convert("RGBA").getchannel("A").load()
        width, height = image.size
        for y in row_pairs(height):
            glyphs = [self.GLYPHS[alpha[x, y] > 0, alpha[x, y + 1] > 0] for x in range(width)]
            yield PADDING + "".join(glyphs) + PADDING


RENDERERS: Dict[str, Type[_BlockRenderer]] = {
    "truecolor": TruecolorRenderer,
    "glyph": GlyphRenderer,
}


def get_renderer(name: str) -> Renderer:
    try:
        return RENDERERS[name]()
    except KeyError:
        raise ValueError(f"Unknown renderer '{name}'. Choose from: {', '.join(RENDERERS)}") from None


@contextmanager
def rasterized(symbol: Symbol, size: int, back_color: Color = WHITE) -> Iterator[Image.Image]:
    """Round-trip *symbol* through a temporary PNG and yield the decoded bitmap.

    The temporary file is removed whether or not the caller's block succeeds.
    """

    try:
        handle, tmp_path = tempfile.mkstemp(prefix="file2qr-", suffix=".png")
        os.close(handle)
    except OSError as exc:
        raise RenderError(f"failed to create temporary file: {exc}") from exc

    try:
        try:
            symbol.image(size, back_color=back_color).save(tmp_path, format="PNG")
        except OSError as exc:
            raise RenderError(f"failed to write QR code to temporary file: {exc}") from exc

        try:
            with Image.open(tmp_path) as decoded:
                decoded.load()
                image = decoded.copy()
        except OSError as exc:
            raise RenderError(f"failed to decode QR code image: {exc}") from exc

        logger.debug(f"Decoded {image.size[0]}x{image.size[1]} bitmap from {tmp_path}")
        yield image
    finally:
        os.remove(tmp_path)


def display(symbol: Symbol, size: int, renderer: Renderer, out: TextIO) -> None:
    """Rasterise *symbol* at *size* pixels and draw it on *out*."""

    with rasterized(symbol, size, renderer.back_color) as image:
        try:
            renderer.render(image, out)
        except OSError as exc:
            raise RenderError(f"failed to write to terminal: {exc}") from exc
