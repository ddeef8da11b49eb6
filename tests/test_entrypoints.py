from __future__ import annotations

import re
import runpy
import sys
from pathlib import Path

import pytest

import satchel
import satchel.cli as cli


def test_version_matches_pyproject() -> None:
    pyproject = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text(encoding="utf-8")
    declared = re.search(r'^version = "([^"]+)"', pyproject, re.MULTILINE)

    assert satchel.__all__ == ["__version__"]
    assert declared is not None
    assert satchel.__version__ == declared.group(1)


def test_python_dash_m_runs_the_cli_and_exits_with_its_status(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["satchel", "--storage-dir", str(tmp_path), "--root", "/proj", "--branch", "main", "list"])
    (tmp_path / "!!proj#main").write_text('(("/proj/a.txt"))\n', encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("satchel.__main__", run_name="__main__")

    assert exc.value.code == 0
    assert capsys.readouterr().out == "/proj/a.txt\n"


def test_python_dash_m_propagates_failure_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "main", lambda: 1)

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("satchel.__main__", run_name="__main__")

    assert exc.value.code == 1
