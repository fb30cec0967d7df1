"""
multistatus - live status block for concurrent tasks.

Prints a continuously updating block of lines, one per task, in place on the
terminal while the caller's threads report their outcomes.

Architecture:
- task.py: Task handle, TaskState, TaskInfo snapshots
- taskset.py: TaskSet registry and the render() loop
- render.py: Repaint strategies (in-place vs. plain summary)
- terminal.py: TTY detection, escape sequences, spinner
- app.py: Optional Textual live view (imported on demand)

Usage:
    task_set = TaskSet()
    for name in names:
        task = task_set.add(name)
        threading.Thread(target=work, args=(task,)).start()
    task_set.render()
"""

from multistatus.task import Task, TaskInfo, TaskState
from multistatus.taskset import REFRESH_INTERVAL, TaskSet
from multistatus.terminal import Spinner, is_terminal

__all__ = [
    "REFRESH_INTERVAL",
    "Spinner",
    "Task",
    "TaskInfo",
    "TaskSet",
    "TaskState",
    "is_terminal",
]
