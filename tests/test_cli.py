"""
Tests for the `bigsort` command line: report contents, prompting, exit codes.
"""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from bigsort import cli


def _console() -> Console:
    return Console(file=io.StringIO(), width=200, force_terminal=False, color_system=None)


def _output(console: Console) -> str:
    return console.file.getvalue()


def test_main_prints_arrays_and_metrics() -> None:
    console = _console()
    code = cli.main(["--size", "5", "--max", "20", "--seed", "3"], console=console)
    out = _output(console)
    assert code == 0
    assert "Original Array:" in out
    assert "Compact Sorted Array:" in out
    assert "Original array size" in out
    assert "Presence vector size" in out
    assert "Sorted array size" in out
    assert "ms" in out


def test_run_returns_sorted_result() -> None:
    result = cli.run(8, 8, seed=1, console=_console())
    assert result.values == list(range(1, 9))
    assert result.presence_vector_size == 8


def test_no_arrays_flag_hides_sequences() -> None:
    console = _console()
    assert cli.main(["--size", "3", "--max", "9", "--no-arrays"], console=console) == 0
    out = _output(console)
    assert "Original Array:" not in out
    assert "Presence vector size" in out


def test_range_too_small_exits_nonzero() -> None:
    console = _console()
    code = cli.main(["--size", "10", "--max", "5"], console=console)
    out = _output(console)
    assert code == 1
    assert "10" in out
    assert "[1, 5]" in out
    assert "Original Array:" not in out


def test_prompts_for_missing_values(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter([4, 12])
    monkeypatch.setattr(cli.IntPrompt, "ask", lambda *args, **kwargs: next(answers))
    console = _console()
    assert cli.main(["--seed", "0"], console=console) == 0
    assert "Presence vector size" in _output(console)


def test_prompt_retries_non_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter([0, -3, 6])
    monkeypatch.setattr(cli.IntPrompt, "ask", lambda *args, **kwargs: next(answers))
    assert cli._prompt_positive(_console(), "Enter array size") == 6


@pytest.mark.parametrize("argv", [["--size", "0", "--max", "5"], ["--size", "x", "--max", "5"]])
def test_bad_arguments_exit_2(argv) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(argv, console=_console())
    assert exc.value.code == 2
