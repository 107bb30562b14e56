"""Shared fixtures for file2qr tests."""

import io

import pytest


class TTYStringIO(io.StringIO):
    """In-memory text stream that claims to be an interactive terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def tty():
    return TTYStringIO()


@pytest.fixture
def fake_stdin(monkeypatch):
    """Replace standard input with the given bytes."""

    def _install(data: bytes) -> None:
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))

    return _install
