"""Command line entry point: read a puzzle file, validate it, write a report."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from sudokucheck.grid import read_input
from sudokucheck.locks import LockKind
from sudokucheck.parallel import validate_parallel, write_report
from sudokucheck.sequential import format_sequential_report, validate_sequential

_SEQUENTIAL = "sequential"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudokucheck",
        description="Validate a sudoku grid sequentially or with threads under a spin lock.",
    )
    parser.add_argument(
        "--mode",
        choices=[_SEQUENTIAL, *(kind.value for kind in LockKind)],
        default=LockKind.CAS.value,
        help="validation strategy (default: %(default)s)",
    )
    parser.add_argument(
        "--input",
        default="input.txt",
        help="file holding thread count, grid size, task increment and the grid",
    )
    parser.add_argument(
        "--output",
        default="output.txt",
        help="file the report is written to",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the validator; returns the process exit status."""
    args = _parser().parse_args(argv)
    try:
        puzzle = read_input(args.input)
        if args.mode == _SEQUENTIAL:
            report = format_sequential_report(validate_sequential(puzzle))
            Path(args.output).write_text(report)
        else:
            write_report(validate_parallel(puzzle, LockKind(args.mode)), args.output)
    except (OSError, ValueError) as exc:
        print(f"sudokucheck: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())