"""Exception hierarchy shared by the file2qr pipeline."""
from __future__ import annotations


class File2QRError(Exception):
    """Base class for every failure that should end the program with status 1."""


class InputError(File2QRError):
    """The input file or standard input could not be read."""


class CapacityError(File2QRError):
    """The payload does not fit into a QR code at the requested recovery level."""

    def __init__(self, message: str, payload_size: int) -> None:
        super().__init__(message)
        self.payload_size = payload_size


class OutputError(File2QRError):
    """The QR code could not be delivered to its destination."""


class RenderError(File2QRError):
    """Drawing the QR code in the terminal failed."""
