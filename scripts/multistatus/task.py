"""
Task state model.

A Task is the handle a caller gets back from TaskSet.add(). The caller's own
thread reports one terminal outcome through it; the TaskSet reads the state
when it repaints.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from multistatus.taskset import TaskSet


class TaskState(Enum):
    """Lifecycle of a Task. PENDING is the only non-terminal state."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class TaskInfo:
    """Immutable snapshot of a task, taken under the registry lock."""

    index: int
    name: str
    state: TaskState

    @property
    def active(self) -> bool:
        return self.state is TaskState.PENDING


class Task:
    """
    A single observable unit of work.

    The Task keeps a weak reference to its TaskSet so it can report its
    outcome without keeping the set alive.

    Example:
        >>> task = task_set.add("fetch index")
        >>> with task:
        ...     fetch_index()  # Completed on success, Failed on exception
    """

    def __init__(self, name: str, parent: TaskSet) -> None:
        self._name = name
        self._state = TaskState.PENDING
        self._parent = weakref.ref(parent)
        # Set by TaskSet.add(); only counted tasks touch the outstanding counter
        self._counted = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> TaskState:
        return self._state

    def is_active(self) -> bool:
        """Return True while the task has not reported an outcome."""
        return self._state is TaskState.PENDING

    def mark_completed(self) -> bool:
        """
        Report success.

        Returns:
            True if this call moved the task out of PENDING, False if the
            task had already reported an outcome (the call is then a no-op).
        """
        return self._finish(TaskState.COMPLETED)

    def mark_failed(self) -> bool:
        """Report failure. Same contract as mark_completed()."""
        return self._finish(TaskState.FAILED)

    def _finish(self, state: TaskState) -> bool:
        parent = self._parent()
        if parent is None or not self._counted:
            # Set discarded, or the task never went through add(): nobody is counting.
            if self._state is not TaskState.PENDING:
                return False
            self._state = state
            return True
        return parent._settle(self, state)

    def __enter__(self) -> Task:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.is_active():
            return
        if exc_type is None:
            self.mark_completed()
        else:
            self.mark_failed()

    def __repr__(self) -> str:
        return f"Task(name={self._name!r}, state={self._state.value})"
