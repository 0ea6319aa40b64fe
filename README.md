# sudokucheck

Checks whether a filled-in Sudoku grid is valid: every row, every column and
every square sub-grid must hold each value at most once.

The check can run in two ways:

* **sequentially**: rows first, then columns, then sub-grids, stopping at the
  first one that fails. Each checked unit gets a line such as
  `Row 1 is valid`, `Column 3 is invalid` or `Grid 2 is valid`;
* **in parallel**: several worker threads take batches of checks from a shared
  counter. The counter sits in a critical section guarded by a busy-waiting
  lock, chosen from test-and-set (`tas`), compare-and-swap (`cas`), or
  bounded-waiting compare-and-swap (`bounded-cas`). Each thread logs when it
  asks for the lock, when it gets in, which rows, columns or sub-grids it
  takes, what it finds and when it leaves. The log lines are merged in time
  order. The report also gives the total time and the average and worst-case
  time a thread needed to enter and to leave the critical section.

Once any worker finds a failing row, column or sub-grid, the workers stop
taking and checking further batches.

## Installing

```
pip install .
```

No third-party libraries are needed. To run the tests:

```
pip install ".[test]"
pytest
```

## Input format

The input is whitespace-separated integers:

```
K N TASK_SIZE
<N rows of N values each>
```

* `K`: number of worker threads (at least 1 for a parallel run);
* `N`: side of the grid; for the sub-grid checks to cover the grid it should
  be a perfect square (4, 9, 16, ...);
* `TASK_SIZE`: how many checks a thread takes each time it is in the
  critical section.

Every cell value must lie between 0 and `N`. There are `3 * N` checks in
total: `N` rows, `N` columns and `N` sub-grids. The settings line is read in
sequential mode too, but only the grid is used there.

Example for a 4×4 grid, 2 threads, 3 checks per batch:

```
2 4 3
1 2 3 4
3 4 1 2
2 1 4 3
4 3 2 1
```

## Command line

```
sudokucheck [--mode {sequential,tas,cas,bounded-cas}] [--input PATH] [--output PATH]
```

* `--mode`: validation strategy, `cas` by default;
* `--input`: the puzzle file, `input.txt` by default;
* `--output`: where the report is written, `output.txt` by default.

`sudokucheck --help` lists the options. If the input cannot be read or is
malformed, the command prints the reason on standard error and exits with
status 1.

## As a library

```python
from sudokucheck.grid import parse_input
from sudokucheck.locks import LockKind
from sudokucheck.parallel import validate_parallel, format_report
from sudokucheck.sequential import validate_sequential, format_sequential_report

text = """2 4 3
1 2 3 4
3 4 1 2
2 1 4 3
4 3 2 1
"""
puzzle = parse_input(text)

print(format_sequential_report(validate_sequential(puzzle)))

for kind in LockKind:
    result = validate_parallel(puzzle, kind)
    print(format_report(result))
```

* `sudokucheck.grid`: `Puzzle` holds the grid and the run settings;
  `row_valid`, `column_valid` and `subgrid_valid` take a zero-based index,
  `check_task` checks one of the `3 * N` numbered checks and `describe_task`
  says which `TaskKind` and 1-based unit a check number stands for.
  `parse_input` and `read_input` build a `Puzzle` from text or a file and
  raise `ValueError` on malformed input.
* `sudokucheck.locks`: `TestAndSetLock`, `CompareAndSwapLock` and
  `BoundedCompareAndSwapLock`, each with `acquire(thread_id, cancelled)` and
  `release(thread_id)`; `make_lock` builds one from a `LockKind` or its name.
* `sudokucheck.parallel`: `validate_parallel` returns a `ValidationResult`
  with the verdict, the ordered `LogEntry` tuple, per-thread `ThreadStats`
  and the total time; `format_report` renders it and `write_report` saves it
  to a file.
* `sudokucheck.sequential`: `validate_sequential` returns a
  `SequentialResult`; `format_sequential_report` renders it.

Timings depend on the machine and on the thread scheduler, so two runs of the
parallel check will not produce the same log order or the same numbers; the
verdict is always the same.