"""Tests for QR symbol generation and rasterisation."""

import os

import pytest
from PIL import Image

from file2qr.errors import CapacityError, OutputError
from file2qr.symbol import BLACK, TRANSPARENT, WHITE, QUIET_ZONE, RecoveryLevel, generate, recovery_level


@pytest.mark.parametrize(
    "token, expected",
    [
        ("low", RecoveryLevel.LOW),
        ("medium", RecoveryLevel.MEDIUM),
        ("high", RecoveryLevel.HIGH),
        ("highest", RecoveryLevel.HIGHEST),
        ("LOW", RecoveryLevel.LOW),
        ("HiGhEsT", RecoveryLevel.HIGHEST),
    ],
)
def test_recovery_level_known_tokens(token, expected):
    """Recognised names map case-insensitively."""
    assert recovery_level(token) is expected


@pytest.mark.parametrize("token", ["", "max", "H", "medium ", "lowest"])
def test_recovery_level_falls_back_to_medium(token):
    """Anything else silently becomes medium."""
    assert recovery_level(token) is RecoveryLevel.MEDIUM


def test_generate_small_payload():
    """A short text fits into the smallest version."""
    symbol = generate(b"Hello, world!")

    assert symbol.version == 1
    assert len(symbol.matrix) == 21 + 2 * QUIET_ZONE


def test_generate_too_large_payload():
    """Payloads beyond version 40 capacity raise CapacityError with the size."""
    payload = os.urandom(3000)

    with pytest.raises(CapacityError) as excinfo:
        generate(payload, RecoveryLevel.MEDIUM)

    assert excinfo.value.payload_size == 3000


def test_higher_recovery_needs_larger_symbol():
    """More error correction leaves less room for data."""
    payload = b"x" * 100

    assert generate(payload, RecoveryLevel.HIGHEST).version > generate(payload, RecoveryLevel.LOW).version


def test_image_has_requested_size_and_colours():
    """The rasterised bitmap is exactly size x size and only uses two colours."""
    symbol = generate(b"Hello, world!")
    image = symbol.image(40)

    assert image.mode == "RGBA"
    assert image.size == (40, 40)
    assert {colour for _, colour in image.getcolors()} == {BLACK, WHITE}
    # 29 modules at one pixel each leave a margin of 5 pixels that stays blank.
    assert image.getpixel((0, 0)) == WHITE
    assert image.getpixel((5 + QUIET_ZONE, 5 + QUIET_ZONE)) == BLACK


def test_image_grows_to_module_count():
    """Sizes below the module count keep one pixel per module."""
    symbol = generate(b"Hello, world!")

    assert symbol.image(10).size == (29, 29)


def test_image_transparent_background():
    """Background pixels carry zero alpha when requested."""
    image = generate(b"abc").image(29, back_color=TRANSPARENT)

    assert image.getpixel((0, 0))[3] == 0
    assert image.getpixel((QUIET_ZONE, QUIET_ZONE)) == BLACK


def test_save_writes_png(tmp_path):
    """The file sink writes a PNG of the requested size."""
    target = tmp_path / "out.png"
    saved = generate(b"Hello, world!").save(target, 128)

    assert saved == target
    with Image.open(target) as image:
        assert image.format == "PNG"
        assert image.size == (128, 128)


def test_save_failure_raises_output_error(tmp_path):
    """Unwritable destinations raise OutputError."""
    with pytest.raises(OutputError, match="Error saving QR code"):
        generate(b"abc").save(tmp_path / "missing" / "out.png", 64)
