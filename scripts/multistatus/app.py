"""
Full-screen live view of a TaskSet.

An alternative to TaskSet.render() for callers that prefer a Textual screen
over in-place redraws. Polls the set on the same cadence as the renderer and
exits on its own once nothing is pending.
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.widgets import Footer, Header, Static

from multistatus.task import TaskInfo, TaskState
from multistatus.taskset import REFRESH_INTERVAL, TaskSet
from multistatus.terminal import (
    COMPLETED_GLYPH,
    FAILED_GLYPH,
    Spinner,
)


class TaskLine(Static):
    """Single row in the task list."""

    DEFAULT_CSS = """
    TaskLine {
        height: 1;
        width: 100%;
        padding: 0 2;
    }

    TaskLine.status-completed {
        color: $success;
    }

    TaskLine.status-failed {
        color: $error;
    }

    TaskLine.status-pending {
        color: $text-muted;
    }
    """

    def __init__(self, task: TaskInfo, **kwargs) -> None:
        super().__init__(markup=False, **kwargs)
        self.task_info = task

    def show(self, task: TaskInfo, pending_glyph: str) -> None:
        """Restyle the row for the task's current state."""
        self.task_info = task
        if task.state is TaskState.COMPLETED:
            glyph = COMPLETED_GLYPH
        elif task.state is TaskState.FAILED:
            glyph = FAILED_GLYPH
        else:
            glyph = pending_glyph

        for state in TaskState:
            self.set_class(state is task.state, f"status-{state.value}")
        self.update(f"{glyph} {task.name}")


class TaskSetApp(App):
    """Textual application showing one TaskSet."""

    TITLE = "multistatus"
    SUB_TITLE = "Task Monitor"

    CSS = """
    Screen {
        background: $surface;
    }

    #task-list {
        height: 1fr;
        padding: 1 0;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        task_set: TaskSet,
        interval: float = REFRESH_INTERVAL,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._task_set = task_set
        self._interval = interval
        self._spinner = Spinner()
        self._lines: list[TaskLine] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield ScrollableContainer(id="task-list")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_tasks()
        self.set_interval(self._interval, self.refresh_tasks)

    def refresh_tasks(self) -> None:
        """Sync rows with the TaskSet; exit once nothing is pending."""
        snapshot = self._task_set.snapshot()
        container = self.query_one("#task-list", ScrollableContainer)

        # Tasks are only ever appended, so new rows go at the end
        new_lines = [TaskLine(task) for task in snapshot[len(self._lines):]]
        if new_lines:
            self._lines.extend(new_lines)
            container.mount(*new_lines)

        pending = self._spinner.next()
        for line, task in zip(self._lines, snapshot):
            line.show(task, pending)

        done = sum(1 for task in snapshot if not task.active)
        self.sub_title = f"{done}/{len(snapshot)} finished"

        if self._task_set.wait(0):
            self.exit(snapshot)


def run(task_set: TaskSet) -> list[TaskInfo] | None:
    """Run the live view until every task finished or the user quits."""
    app = TaskSetApp(task_set)
    return app.run()
