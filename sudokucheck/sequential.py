"""Single-threaded sudoku validation: rows, then columns, then sub-grids."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from sudokucheck.grid import Puzzle


@dataclass(frozen=True)
class SequentialResult:
    """Outcome of a sequential run: verdict, per-unit log lines and elapsed time."""

    valid: bool
    lines: tuple[str, ...]
    total_micros: int


def _check_units(
    label: str,
    count: int,
    check: Callable[[int], bool],
    lines: list[str],
) -> bool:
    """Check units in order, logging each; stop at the first invalid one."""
    for index in range(count):
        ok = check(index)
        lines.append(f"{label} {index + 1} is {'valid' if ok else 'invalid'}")
        if not ok:
            return False
    return True


def validate_sequential(puzzle: Puzzle) -> SequentialResult:
    """Check every row, column and sub-grid in turn, stopping at the first failure."""
    lines: list[str] = []
    size = puzzle.size
    started = time.perf_counter_ns()
    valid = (
        _check_units("Row", size, puzzle.row_valid, lines)
        and _check_units("Column", size, puzzle.column_valid, lines)
        and _check_units("Grid", size, puzzle.subgrid_valid, lines)
    )
    elapsed = (time.perf_counter_ns() - started) // 1000
    return SequentialResult(valid=valid, lines=tuple(lines), total_micros=elapsed)


def format_sequential_report(result: SequentialResult) -> str:
    """Render the per-unit lines, the verdict and the elapsed time."""
    lines = list(result.lines)
    lines.append("Sudoku is valid." if result.valid else "Sudoku is invalid.")
    lines.append(f"Time taken is {result.total_micros} microseconds.")
    return "".join(line + "\n" for line in lines)