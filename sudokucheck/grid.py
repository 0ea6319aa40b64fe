"""Sudoku grid model, the per-task validity checks and input parsing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence


class TaskKind(Enum):
    """The three kinds of unit a sudoku is checked in."""

    ROW = "row"
    COLUMN = "column"
    SUBGRID = "sub-grid"

    @property
    def label(self) -> str:
        return self.value


def _all_distinct(values: Iterable[int]) -> bool:
    seen: set[int] = set()
    for value in values:
        if value in seen:
            return False
        seen.add(value)
    return True


@dataclass(frozen=True)
class Puzzle:
    """An n-by-n sudoku grid together with the run settings read with it."""

    cells: tuple[tuple[int, ...], ...]
    threads: int = 1
    task_increment: int = 1

    def __post_init__(self) -> None:
        rows = tuple(tuple(int(value) for value in row) for row in self.cells)
        size = len(rows)
        for row in rows:
            if len(row) != size:
                raise ValueError(f"grid is not square: row of length {len(row)} in a grid of {size} rows")
            for value in row:
                if not 0 <= value <= size:
                    raise ValueError(f"cell value {value} is outside 0..{size}")
        object.__setattr__(self, "cells", rows)

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def subgrid_size(self) -> int:
        return math.isqrt(self.size)

    @property
    def total_tasks(self) -> int:
        """Rows, columns and sub-grids: three tasks per unit of size."""
        return 3 * self.size

    def row_valid(self, index: int) -> bool:
        """True when row ``index`` (0-based) holds no repeated value."""
        return _all_distinct(self.cells[index])

    def column_valid(self, index: int) -> bool:
        """True when column ``index`` (0-based) holds no repeated value."""
        return _all_distinct(row[index] for row in self.cells)

    def subgrid_valid(self, index: int) -> bool:
        """True when sub-grid ``index`` (0-based, row-major) holds no repeated value."""
        side = self.subgrid_size
        row_start = (index // side) * side
        col_start = (index % side) * side
        return _all_distinct(
            value
            for row in self.cells[row_start:row_start + side]
            for value in row[col_start:col_start + side]
        )

    def describe_task(self, task: int) -> tuple[TaskKind, int]:
        """Map a task number to its kind and the 1-based unit it covers."""
        n = self.size
        if not 0 <= task < self.total_tasks:
            raise IndexError(f"task {task} is outside 0..{self.total_tasks - 1}")
        if task < n:
            return TaskKind.ROW, task + 1
        if task < 2 * n:
            return TaskKind.COLUMN, task + 1 - n
        return TaskKind.SUBGRID, task + 1 - 2 * n

    def check_task(self, task: int) -> bool:
        """Run the check that task number ``task`` stands for."""
        kind, number = self.describe_task(task)
        if kind is TaskKind.ROW:
            return self.row_valid(number - 1)
        if kind is TaskKind.COLUMN:
            return self.column_valid(number - 1)
        return self.subgrid_valid(number - 1)


def parse_input(text: str) -> Puzzle:
    """Parse "threads size increment" followed by size*size cell values."""
    tokens = text.split()
    if len(tokens) < 3:
        raise ValueError("input must start with thread count, grid size and task increment")
    try:
        numbers = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"input holds a non-integer value: {exc}") from exc
    threads, size, task_increment = numbers[:3]
    if size < 0:
        raise ValueError(f"grid size {size} is negative")
    values = numbers[3:]
    if len(values) < size * size:
        raise ValueError(f"expected {size * size} cell values, found {len(values)}")
    rows: Sequence[Sequence[int]] = [values[i * size:(i + 1) * size] for i in range(size)]
    return Puzzle(cells=tuple(tuple(row) for row in rows), threads=threads, task_increment=task_increment)


def read_input(path: str | Path) -> Puzzle:
    """Read and parse an input file."""
    return parse_input(Path(path).read_text())


def format_clock(moment: datetime) -> str:
    """Render a moment as local HH:MM:SS.ffffff; naive moments are taken as local."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"{moment:%H:%M:%S}.{moment.microsecond:06d}"