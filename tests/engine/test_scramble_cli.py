"""Tests for the scramble diagnostic CLI."""

from __future__ import annotations

import pytest

from hexturn.engine.scramble_cli import main


def test_scramble_and_replay(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--cells", "40", "--aspect", "1.0", "--moves", "25", "--seed", "4"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Grid:" in out
    assert "Inverse replay solved=True" in out


def test_operator_subset(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--operators", "vertex3_120", "--moves", "10", "--seed", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Vertex triad" in out
    assert "Ring of 6" not in out


def test_bad_operator_exits() -> None:
    with pytest.raises(SystemExit):
        main(["--operators", "spin9"])
