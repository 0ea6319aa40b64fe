[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sudokucheck"
version = "0.1.0"
description = "Sudoku grid validation, sequential or across threads guarded by spin locks, with timing reports"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sudoku",
    "validation",
    "threads",
    "spin lock",
    "test-and-set",
    "compare-and-swap",
    "mutual exclusion",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sudokucheck = "sudokucheck.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sudokucheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
