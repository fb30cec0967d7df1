"""Shared fixtures and fake output streams."""

import io
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))


class TTYStream(io.StringIO):
    """In-memory stream that claims to be a terminal."""

    def isatty(self) -> bool:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        return True


class RecordingStream(io.StringIO):
    """Stream that keeps every write() call separately."""

    def __init__(self, tty: bool = False) -> None:
        super().__init__()
        self.writes: list[str] = []
        self._tty = tty

    def write(self, s: str) -> int:
        self.writes.append(s)
        return super().write(s)

    def isatty(self) -> bool:
        return self._tty


@pytest.fixture
def xterm(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend to run under a capable terminal."""
    monkeypatch.setenv("TERM", "xterm-256color")
