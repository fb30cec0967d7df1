"""
Terminal capability detection and escape sequences.

Everything that knows about ANSI control codes lives here so the renderers
only deal with lines of text.
"""

from __future__ import annotations

import logging
import os
from typing import TextIO

logger = logging.getLogger(__name__)

# Cursor control
CURSOR_UP = "\033[A"
CURSOR_DOWN = "\033[B"
CLEAR_LINE = "\033[2K"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

# SGR colors
GREEN = "\033[0;32m"
RED = "\033[0;31m"
RESET = "\033[0m"

# Status glyphs
COMPLETED_GLYPH = "✔"
FAILED_GLYPH = "✗"
PLAIN_PENDING_GLYPH = "-"

DEFAULT_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


def is_terminal(stream: TextIO) -> bool:
    """
    Decide whether in-place redraws are possible on stream.

    Any failure to ask the stream counts as "not a terminal", as does
    TERM=dumb.
    """
    try:
        is_tty = bool(stream.isatty())
    except (AttributeError, ValueError, OSError) as e:
        logger.debug("isatty() unavailable on %r: %s", stream, e)
        return False

    if not is_tty:
        return False
    if os.environ.get("TERM", "") == "dumb":
        logger.debug("TERM=dumb, disabling in-place redraw")
        return False
    return True


def colorize(glyph: str, color: str, use_color: bool = True) -> str:
    """Wrap glyph in an SGR color, or return it bare."""
    if not use_color:
        return glyph
    return f"{color}{glyph}{RESET}"


def erase_block(lines: int) -> str:
    """
    Build the sequence that clears a block of `lines` lines and leaves the
    cursor on its first line.

    The leading newlines make sure the block exists below the cursor, so the
    erase never climbs into output written before the first repaint.
    """
    return (
        "\n" * lines
        + CURSOR_UP * lines
        + (CURSOR_DOWN + CLEAR_LINE) * lines
        + CURSOR_UP * lines
    )


class Spinner:
    """Cycling animation frames for pending tasks."""

    def __init__(self, frames: str = DEFAULT_FRAMES) -> None:
        if not frames:
            raise ValueError("Spinner needs at least one frame")
        self._frames = frames
        self._pos = 0

    @property
    def frames(self) -> str:
        return self._frames

    def current(self) -> str:
        return self._frames[self._pos % len(self._frames)]

    def next(self) -> str:
        """Return the current frame and advance by one, wrapping."""
        frame = self.current()
        self._pos = (self._pos + 1) % len(self._frames)
        return frame

    def reset(self) -> None:
        self._pos = 0
