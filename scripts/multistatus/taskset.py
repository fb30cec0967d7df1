"""
TaskSet: the task registry and its redraw loop.

Callers add tasks, hand the returned Task handles to their own threads, and
then block in render() until every task has reported or the caller cancels.

Concurrency:
    - One lock guards the task list and the outstanding counter. add(),
      the mark operations and snapshot() take it; callers never do.
    - A threading.Event is set whenever the outstanding counter is zero.
      render() waits on it with the refresh interval as timeout, so the
      same wait doubles as the redraw timer.
    - The cancellation signal is a caller-owned threading.Event. While one is
      given, the wait is sliced into CANCEL_POLL steps so a cancel is noticed
      within one step instead of one full interval.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from enum import Enum
from typing import TextIO

from multistatus.render import InteractiveRenderer, PlainRenderer, Renderer
from multistatus.task import Task, TaskInfo, TaskState
from multistatus.terminal import Spinner, is_terminal

logger = logging.getLogger(__name__)

# Redraw cadence in seconds
REFRESH_INTERVAL = 0.1
# Longest delay between a cancel and the final repaint
CANCEL_POLL = 0.01


class _Wake(Enum):
    TICK = "tick"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class TaskSet:
    """A collection of Tasks rendered as one status block."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        interval: float = REFRESH_INTERVAL,
        interactive: bool | None = None,
        use_color: bool = True,
        spinner: Spinner | None = None,
    ) -> None:
        """
        Args:
            stream: Where to render. None means sys.stdout at render() time.
            interval: Seconds between intermediate repaints.
            interactive: Force (True) or forbid (False) in-place redraws.
                None detects it from the stream.
            use_color: Wrap the completed/failed glyphs in SGR colors.
            spinner: Animation for pending tasks; a fresh one by default.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")

        self._stream = stream
        self._interval = interval
        self._interactive = interactive
        self._use_color = use_color
        self._spinner = spinner or Spinner()

        self._lock = threading.Lock()
        self._tasks: list[Task] = []
        self._outstanding = 0
        self._finished = threading.Event()
        self._finished.set()

    # --- Registry ---

    def add(self, name: str) -> Task:
        """Register a new pending task and return its handle."""
        task = Task(name, self)
        with self._lock:
            task._counted = True
            self._tasks.append(task)
            self._outstanding += 1
            self._finished.clear()
        return task

    def _settle(self, task: Task, state: TaskState) -> bool:
        """Move task to a terminal state and count it down, at most once."""
        with self._lock:
            if task._parent() is not self or not task._counted:
                logger.debug(
                    "Ignoring %s for %r, not registered here", state.value, task.name,
                )
                return False
            if task._state is not TaskState.PENDING:
                logger.debug(
                    "Ignoring %s for %r, already %s",
                    state.value, task.name, task._state.value,
                )
                return False
            task._state = state
            self._outstanding = max(self._outstanding - 1, 0)
            if self._outstanding == 0:
                self._finished.set()
        return True

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    @property
    def outstanding(self) -> int:
        with self._lock:
            return self._outstanding

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def snapshot(self) -> list[TaskInfo]:
        """Consistent view of every task, in insertion order."""
        with self._lock:
            return [
                TaskInfo(index=i, name=t.name, state=t.state)
                for i, t in enumerate(self._tasks)
            ]

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no task is pending. Returns False on timeout."""
        return self._finished.wait(timeout)

    # --- Rendering ---

    def _renderer(self, stream: TextIO) -> Renderer:
        interactive = self._interactive
        if interactive is None:
            interactive = is_terminal(stream)

        if interactive:
            logger.debug("Rendering in place on %r", stream)
            return InteractiveRenderer(stream, self._spinner, self._use_color)
        logger.debug("Output is not a terminal, printing summary only")
        return PlainRenderer(stream)

    def render(self, cancel: threading.Event | None = None) -> None:
        """
        Paint the status block until every task has finished.

        On a terminal the block is redrawn in place every interval and once
        more when the last task reports. Elsewhere nothing is printed until
        the end, then each task is printed once as plain text.

        Args:
            cancel: When set, render() paints a final frame and returns
                without waiting for pending tasks.
        """
        stream = self._stream or sys.stdout
        renderer = self._renderer(stream)

        try:
            while True:
                wake = self._wait_for_wake(cancel)
                if wake is _Wake.TICK:
                    renderer.paint(self.snapshot(), final=False)
                    continue
                if wake is _Wake.CANCELLED:
                    logger.debug("Render cancelled with %d pending", self.outstanding)
                renderer.paint(self.snapshot(), final=True)
                return
        finally:
            renderer.restore()

    def _wait_for_wake(self, cancel: threading.Event | None) -> _Wake:
        """Block for at most one interval; report what ended the wait."""
        deadline = time.monotonic() + self._interval
        while True:
            if cancel is not None and cancel.is_set():
                return _Wake.CANCELLED
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return _Wake.TICK
            step = remaining if cancel is None else min(remaining, CANCEL_POLL)
            if self._finished.wait(step):
                return _Wake.FINISHED
