#!/usr/bin/env python3
"""
multistatus demo

Starts a number of simulated tasks on background threads, each sleeping for
a random time before reporting success or failure, and renders their status
until all have finished. Ctrl+C stops rendering early.

Usage:
    multistatus_demo.py                     Ten tasks, in-place status block
    multistatus_demo.py --count 25 --seed 7 Reproducible run with 25 tasks
    multistatus_demo.py --plain             Print the summary once at the end
    multistatus_demo.py --tui               Full-screen Textual view

Requirements:
    pip install textual   (only for --tui)
"""

import argparse
import logging
import random
import signal
import sys
import threading
import time
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from multistatus import Task, TaskSet, TaskState  # noqa: E402

logger = logging.getLogger("multistatus.demo")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def simulate(task: Task, delay: float, fail: bool) -> None:
    """Sleep, then report the predetermined outcome."""
    time.sleep(delay)
    if fail:
        task.mark_failed()
    else:
        task.mark_completed()
    logger.debug("%s finished after %.2fs", task.name, delay)


def start_workers(
    task_set: TaskSet,
    count: int,
    max_delay: float,
    fail_rate: float,
    rng: random.Random,
) -> list[threading.Thread]:
    """Add `count` tasks and start a daemon thread for each."""
    threads = []
    for i in range(count):
        task = task_set.add(f"Task #{i}")
        delay = rng.uniform(0, max_delay) if max_delay > 0 else 0.0
        fail = rng.random() < fail_rate
        thread = threading.Thread(
            target=simulate,
            args=(task, delay, fail),
            name=f"demo-{i}",
            daemon=True,
        )
        threads.append(thread)

    for thread in threads:
        thread.start()
    return threads


def exit_code(task_set: TaskSet, cancelled: bool) -> int:
    if cancelled:
        return EXIT_INTERRUPTED
    if any(t.state is TaskState.FAILED for t in task_set.tasks):
        return EXIT_FAILED
    return EXIT_OK


def render_in_place(task_set: TaskSet) -> bool:
    """Render with SIGINT wired to cancellation. Returns True if cancelled."""
    cancel = threading.Event()

    def _handle_signal(signum, frame):
        cancel.set()

    previous = signal.signal(signal.SIGINT, _handle_signal)
    try:
        task_set.render(cancel)
    finally:
        signal.signal(signal.SIGINT, previous)
    return cancel.is_set()


def render_tui(task_set: TaskSet) -> bool:
    """Render with the Textual view. Returns True if the user quit early."""
    from multistatus.app import run

    run(task_set)
    return task_set.outstanding > 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="multistatus demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of simulated tasks (default: 10)",
    )
    parser.add_argument(
        "--max-delay",
        type=float,
        default=8.0,
        help="Upper bound of each task's random duration in seconds (default: 8)",
    )
    parser.add_argument(
        "--fail-rate",
        type=float,
        default=0.2,
        help="Probability that a task fails (default: 0.2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible run",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Do not color the status glyphs",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the final status once instead of redrawing in place",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Show a full-screen Textual view",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.count < 0:
        parser.error("--count must not be negative")
    if args.max_delay < 0:
        parser.error("--max-delay must not be negative")
    if not 0.0 <= args.fail_rate <= 1.0:
        parser.error("--fail-rate must be between 0 and 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    task_set = TaskSet(
        interactive=False if args.plain else None,
        use_color=not args.no_color,
    )
    start_workers(
        task_set, args.count, args.max_delay, args.fail_rate,
        random.Random(args.seed),
    )

    if args.tui:
        try:
            cancelled = render_tui(task_set)
            return exit_code(task_set, cancelled)
        except ImportError as e:
            print(f"TUI requires textual: {e}", file=sys.stderr)
            print("Install with: pip install textual", file=sys.stderr)
            print("Falling back to in-place rendering.", file=sys.stderr)

    cancelled = render_in_place(task_set)
    return exit_code(task_set, cancelled)


if __name__ == "__main__":
    sys.exit(main())
