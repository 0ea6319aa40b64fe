"""Sudoku grid validation, sequential or with spin-lock-guarded worker threads."""

__version__ = "0.1.0"
__all__ = ["__version__"]