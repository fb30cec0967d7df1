"""Repaint strategies: in-place on a terminal, or one plain summary."""

from __future__ import annotations

from typing import Protocol, Sequence, TextIO

from multistatus.task import TaskInfo, TaskState
from multistatus.terminal import (
    COMPLETED_GLYPH,
    CURSOR_UP,
    FAILED_GLYPH,
    GREEN,
    HIDE_CURSOR,
    PLAIN_PENDING_GLYPH,
    RED,
    SHOW_CURSOR,
    Spinner,
    colorize,
    erase_block,
)


def format_line(glyph: str, name: str) -> str:
    return f"  {glyph} {name}\n"


class Renderer(Protocol):
    """Protocol for a repaint strategy."""

    def paint(self, tasks: Sequence[TaskInfo], final: bool) -> None:
        """Draw the block. `final` marks the last paint of a render call."""
        ...

    def restore(self) -> None:
        """Undo any terminal state left behind by an interrupted paint."""
        ...


class InteractiveRenderer:
    """
    Redraw the block in place with ANSI cursor control.

    Each paint is written as one string and flushed, so a partially written
    frame is never visible.
    """

    def __init__(
        self,
        stream: TextIO,
        spinner: Spinner,
        use_color: bool = True,
    ) -> None:
        self._stream = stream
        self._spinner = spinner
        self._completed = colorize(COMPLETED_GLYPH, GREEN, use_color)
        self._failed = colorize(FAILED_GLYPH, RED, use_color)
        self._cursor_hidden = False

    def frame(self, tasks: Sequence[TaskInfo], final: bool) -> str:
        """Build one full frame, advancing the spinner by one step."""
        count = len(tasks)
        pending = self._spinner.next()
        parts = [erase_block(count)]

        for task in tasks:
            if task.state is TaskState.COMPLETED:
                glyph = self._completed
            elif task.state is TaskState.FAILED:
                glyph = self._failed
            else:
                glyph = pending
            parts.append(format_line(glyph, task.name))

        parts.append(HIDE_CURSOR)
        if final:
            parts.append(SHOW_CURSOR)
        else:
            # Park the cursor on the first line so the next erase covers the block
            parts.append(CURSOR_UP * count)
        return "".join(parts)

    def paint(self, tasks: Sequence[TaskInfo], final: bool) -> None:
        text = self.frame(tasks, final)
        self._cursor_hidden = True
        self._stream.write(text)
        self._stream.flush()
        self._cursor_hidden = not final

    def restore(self) -> None:
        if not self._cursor_hidden:
            return
        self._cursor_hidden = False
        self._stream.write(SHOW_CURSOR)
        self._stream.flush()


class PlainRenderer:
    """Print the final state once, without escape sequences."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def frame(self, tasks: Sequence[TaskInfo]) -> str:
        lines = []
        for task in tasks:
            if task.state is TaskState.COMPLETED:
                glyph = COMPLETED_GLYPH
            elif task.state is TaskState.FAILED:
                glyph = FAILED_GLYPH
            else:
                glyph = PLAIN_PENDING_GLYPH
            lines.append(format_line(glyph, task.name))
        return "".join(lines)

    def paint(self, tasks: Sequence[TaskInfo], final: bool) -> None:
        if not final:
            return
        text = self.frame(tasks)
        if text:
            self._stream.write(text)
            self._stream.flush()

    def restore(self) -> None:
        pass
