"""Convert files to QR codes shown in the terminal or saved as PNG images."""

PROGRAM_NAME = "file2qr"
__version__ = "1.0.0"
