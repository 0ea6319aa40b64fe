"""Multi-threaded sudoku validation with a spin lock around the task counter."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Union

from sudokucheck.grid import Puzzle, format_clock
from sudokucheck.locks import LockKind, SpinLock, make_lock

_MICROSECOND = timedelta(microseconds=1)


def _micros(start: datetime, end: datetime) -> int:
    return (end - start) // _MICROSECOND


@dataclass(frozen=True)
class LogEntry:
    """One line of the run log, stamped with the moment it was made."""

    timestamp: datetime
    thread: int
    message: str


@dataclass
class ThreadStats:
    """Sum and worst case of one thread's critical-section entry and exit times."""

    entry_total: int = 0
    entry_worst: int = 0
    exit_total: int = 0
    exit_worst: int = 0

    def record_entry(self, micros: int) -> None:
        """Add one time taken to enter the critical section."""
        self.entry_total += micros
        self.entry_worst = max(self.entry_worst, micros)

    def record_exit(self, micros: int) -> None:
        """Add one time taken to leave the critical section."""
        self.exit_total += micros
        self.exit_worst = max(self.exit_worst, micros)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a parallel run: verdict, ordered log and timings."""

    valid: bool
    logs: tuple[LogEntry, ...]
    stats: tuple[ThreadStats, ...]
    total_micros: int

    @property
    def average_entry(self) -> float:
        return sum(s.entry_total for s in self.stats) / len(self.stats)

    @property
    def average_exit(self) -> float:
        return sum(s.exit_total for s in self.stats) / len(self.stats)

    @property
    def worst_entry(self) -> int:
        return max((s.entry_worst for s in self.stats), default=0)

    @property
    def worst_exit(self) -> int:
        return max((s.exit_worst for s in self.stats), default=0)


@dataclass
class _Run:
    puzzle: Puzzle
    lock: SpinLock
    valid: bool = True
    counter: int = 0
    logs: list[list[LogEntry]] = field(default_factory=list)
    stats: list[ThreadStats] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.logs = [[] for _ in range(self.puzzle.threads)]
        self.stats = [ThreadStats() for _ in range(self.puzzle.threads)]

    def _cancelled(self) -> bool:
        return not self.valid

    def _log(self, thread_id: int, action: str, moment: datetime | None = None, suffix: str = "") -> None:
        moment = moment or datetime.now()
        message = f"Thread {thread_id + 1} {action} at {format_clock(moment)}{suffix}"
        self.logs[thread_id].append(LogEntry(moment, thread_id, message))

    def _leave(self, thread_id: int, entered: datetime, logged: bool) -> None:
        self.lock.release(thread_id)
        exited = datetime.now()
        if logged:
            self._log(thread_id, "exits CS1", exited)
        self.stats[thread_id].record_exit(_micros(entered, exited))

    def _process(self, thread_id: int, start: int, stop: int) -> None:
        for task in range(start, stop):
            if not self.valid:
                return
            outcome = self.puzzle.check_task(task)
            if not self.valid:
                return
            kind, number = self.puzzle.describe_task(task)
            verdict = "valid " if outcome else "invalid "
            self._log(
                thread_id,
                f"completes checking of {kind.label} {number}",
                suffix=f" and finds it as {verdict}",
            )
            if not outcome:
                self.valid = False
                return

    def worker(self, thread_id: int) -> None:
        total = self.puzzle.total_tasks
        while self.valid:
            requested = datetime.now()
            self._log(thread_id, "requests to enter CS1", requested)
            if not self.lock.acquire(thread_id, self._cancelled):
                break
            if not self.valid:
                self.lock.release(thread_id)
                break
            entered = datetime.now()
            self.stats[thread_id].record_entry(_micros(requested, entered))
            self._log(thread_id, "enters CS1", entered)

            start = self.counter
            stop = min(start + self.puzzle.task_increment, total)
            self.counter = stop
            if start >= total or stop - start <= 0:
                self._leave(thread_id, entered, logged=True)
                break

            for task in range(start, stop):
                if not self.valid:
                    break
                kind, number = self.puzzle.describe_task(task)
                self._log(thread_id, f"grabs {kind.label} {number}")
            if not self.valid:
                self._leave(thread_id, entered, logged=False)
                break

            self._leave(thread_id, entered, logged=True)
            self._process(thread_id, start, stop)


def validate_parallel(puzzle: Puzzle, lock_kind: Union[LockKind, str]) -> ValidationResult:
    """Validate ``puzzle`` with ``puzzle.threads`` threads sharing tasks under the given lock."""
    if puzzle.threads < 1:
        raise ValueError(f"at least one thread is needed, got {puzzle.threads}")
    run = _Run(puzzle, make_lock(lock_kind, puzzle.threads))
    workers = [
        threading.Thread(target=run.worker, args=(thread_id,), daemon=True)
        for thread_id in range(puzzle.threads)
    ]
    started = datetime.now()
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    finished = datetime.now()

    merged = [entry for thread_logs in run.logs for entry in thread_logs]
    merged.sort(key=lambda entry: entry.timestamp)
    return ValidationResult(
        valid=run.valid,
        logs=tuple(merged),
        stats=tuple(run.stats),
        total_micros=_micros(started, finished),
    )


def format_report(result: ValidationResult) -> str:
    """Render the log lines, the verdict and the timing summary."""
    lines = [entry.message for entry in result.logs]
    lines.append("Sudoku is" + (" Valid" if result.valid else " inValid"))
    lines.append(f"The total time taken is {result.total_micros} microseconds")
    lines.append(f"Average time taken by a thread to enter the CS is {result.average_entry:g} microseconds")
    lines.append(f"Average time taken by a thread to exit the CS is {result.average_exit:g} microseconds")
    lines.append(f"Worst-case time taken by a thread to enter the CS is {result.worst_entry} microseconds")
    lines.append(f"Worst-case time taken by a thread to exit the CS is {result.worst_exit} microseconds")
    return "".join(line + "\n" for line in lines)


def write_report(result: ValidationResult, path: Union[str, Path]) -> None:
    """Write the report for ``result`` to ``path``."""
    Path(path).write_text(format_report(result))