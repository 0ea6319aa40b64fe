import pytest

from sudokucheck.cli import main

VALID_INPUT = "2 4 2\n1 2 3 4\n3 4 1 2\n2 1 4 3\n4 3 2 1\n"
INVALID_INPUT = "2 4 2\n1 1 3 4\n3 4 1 2\n2 1 4 3\n4 3 2 1\n"


def _run(tmp_path, text, mode):
    source = tmp_path / "input.txt"
    target = tmp_path / "output.txt"
    source.write_text(text)
    status = main(["--mode", mode, "--input", str(source), "--output", str(target)])
    return status, target


def test_sequential_valid(tmp_path):
    status, target = _run(tmp_path, VALID_INPUT, "sequential")
    assert status == 0
    lines = target.read_text().splitlines()
    assert lines[0] == "Row 1 is valid"
    assert lines[-2] == "Sudoku is valid."
    assert lines[-1].startswith("Time taken is ")


def test_sequential_invalid(tmp_path):
    status, target = _run(tmp_path, INVALID_INPUT, "sequential")
    assert status == 0
    lines = target.read_text().splitlines()
    assert lines[:2] == ["Row 1 is invalid", "Sudoku is invalid."]


@pytest.mark.parametrize("mode", ["tas", "cas", "bounded-cas"])
def test_parallel_valid(tmp_path, mode):
    status, target = _run(tmp_path, VALID_INPUT, mode)
    assert status == 0
    lines = target.read_text().splitlines()
    assert "Sudoku is Valid" in lines
    completed = [line for line in lines if "completes checking of" in line]
    assert len(completed) == 12
    assert lines[-1].startswith("Worst-case time taken by a thread to exit the CS is ")


@pytest.mark.parametrize("mode", ["tas", "cas", "bounded-cas"])
def test_parallel_invalid(tmp_path, mode):
    status, target = _run(tmp_path, INVALID_INPUT, mode)
    assert status == 0
    lines = target.read_text().splitlines()
    assert "Sudoku is inValid" in lines
    assert any("finds it as invalid" in line for line in lines)


def test_missing_input_reports_failure(tmp_path):
    target = tmp_path / "output.txt"
    status = main(["--input", str(tmp_path / "absent.txt"), "--output", str(target)])
    assert status == 1
    assert not target.exists()


def test_malformed_input_reports_failure(tmp_path, capsys):
    status, target = _run(tmp_path, "2 4", "sequential")
    assert status == 1
    assert "sudokucheck:" in capsys.readouterr().err
    assert not target.exists()


def test_parallel_with_no_threads_fails(tmp_path):
    status, target = _run(tmp_path, VALID_INPUT.replace("2 4 2", "0 4 2", 1), "cas")
    assert status == 1
    assert not target.exists()


def test_unknown_mode_is_rejected(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["--mode", "spin", "--input", str(tmp_path / "x"), "--output", str(tmp_path / "y")])
    assert info.value.code == 2