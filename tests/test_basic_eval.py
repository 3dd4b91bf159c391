from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from calcpy import CalcError, evaluate_file, evaluate_source, parse_file
from calcpy.ast import Num
from calcpy.cli import main
from calcpy.config import CliConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CALCPY_PROMPT", raising=False)
    monkeypatch.delenv("CALCPY_LOG_LEVEL", raising=False)


def test_end_to_end() -> None:
    assert evaluate_source("1 + 2 * 3 - -10") == 17


def test_errors_share_one_root() -> None:
    for src in ["1 + a", "1 +", "1 / 0"]:
        with pytest.raises(CalcError):
            evaluate_source(src)


def test_file_input(tmp_path: Path) -> None:
    p = tmp_path / "expr.calc"
    p.write_text("(2 + 3) * 4\n", encoding="utf-8")
    assert evaluate_file(p) == 20
    assert parse_file(p).span.end == 11


def test_cli_evaluates_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1 + 1", "2 * (3 + 4)"]) == 0
    assert capsys.readouterr().out == "2\n14\n"


def test_cli_reports_diagnostic_and_fails(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1 + 1", "10 / 0"]) == 1
    cap = capsys.readouterr()
    assert cap.out == "2\n"
    assert cap.err == "error: could not evaluate the input\n10 / 0\n^^^^^^\ncaused by 0..6: division by zero\n"


def test_cli_ast_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--ast", "-3"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["type"] == "UnaryOp"
    assert payload["operator"] == "-"
    assert payload["operand"] == {"type": "Num", "value": 3, "span": {"type": "Span", "start": 1, "end": 2}}


def test_cli_format(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--format", "((1+2))*(3*4)- (5-6)"]) == 0
    assert capsys.readouterr().out == "(1 + 2) * (3 * 4) - (5 - 6)\n"


def test_cli_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "expr.calc"
    p.write_text("6 / 4\n", encoding="utf-8")
    assert main(["--file", str(p)]) == 0
    assert capsys.readouterr().out == "1\n"


def test_repl_continues_after_errors(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1+1\n\n2/0\n3 * 3\n"))
    assert main([]) == 0
    cap = capsys.readouterr()
    assert cap.out == "> 2\n> > > 9\n> "
    assert "division by zero" in cap.err


def test_repl_prompt_from_env(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("CALCPY_PROMPT", "calc> ")
    monkeypatch.setattr("sys.stdin", io.StringIO("4\n"))
    assert main([]) == 0
    assert capsys.readouterr().out == "calc> 4\ncalc> "


def test_config_overrides_and_validation() -> None:
    cfg = CliConfig.from_env({"CALCPY_LOG_LEVEL": "debug"})
    assert cfg.log_level == "DEBUG"
    assert cfg.with_overrides(prompt="$ ").prompt == "$ "
    with pytest.raises(ValueError):
        CliConfig.from_env({"CALCPY_LOG_LEVEL": "chatty"})


def test_cli_rejects_bad_log_level() -> None:
    with pytest.raises(SystemExit) as e:
        main(["--log-level", "chatty", "1"])
    assert e.value.code == 2


def test_parse_file_returns_tree(tmp_path: Path) -> None:
    p = tmp_path / "n.calc"
    p.write_text("42", encoding="utf-8")
    assert isinstance(parse_file(p), Num)


def test_cli_prints_cause_of_lex_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["2 * x"]) == 1
    err = capsys.readouterr().err.splitlines()
    assert err[:3] == ["error: could not tokenize the input", "2 * x", "    ^"]
    assert err[3] == "caused by 4..5: invalid character 'x'"


def test_repl_survives_huge_inputs(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    lines = ["9" * 5000, " + ".join(["1"] * 2000), "7"]
    monkeypatch.setattr("sys.stdin", io.StringIO("\n".join(lines) + "\n"))
    assert main([]) == 0
    cap = capsys.readouterr()
    assert cap.out == "> > 2000\n> 7\n> "
    assert "caused by 0..5000: number literal does not fit in 64 bits" in cap.err
