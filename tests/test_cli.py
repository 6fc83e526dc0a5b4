import importlib.util
import io
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "main.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("procsim_cli", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cli_round_robin(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0 1 0 3 2 0 2\n\n"))
    assert cli.main(["3", "1", "2"]) == 0
    assert capsys.readouterr().out == "0 1\n1 1\n2 2\n3 2\n4 1\n"


def test_cli_defaults_and_stats(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0 1 0 2 2 0 1\n\n"))
    assert cli.main(["FCFS", "--stats"]) == 0
    out = capsys.readouterr()
    assert out.out == "0 1\n1 1\n2 2\n"
    assert "makespan" in out.err


def test_cli_input_file(cli, tmp_path, capsys):
    path = tmp_path / "in.txt"
    path.write_text("0 1 0 1 2 0 1\n\n", encoding="utf-8")
    assert cli.main(["0", "2", "--input", str(path)]) == 0
    assert capsys.readouterr().out == "0 1 2\n"


def test_cli_invalid_method(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0 1 0 1\n\n"))
    assert cli.main(["9"]) == 2
    assert capsys.readouterr().out == ""


def test_cli_malformed_input(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0 1 0\n\n"))
    assert cli.main(["0"]) == 2
    assert capsys.readouterr().out == ""
