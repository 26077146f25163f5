import json
import logging
from pathlib import Path

import pytest

from bl import bl_cli

GOOD = "PROGRAM p IS BEGIN move END p"
BAD = "PROGRAM p IS BEGIN move END q"


def test_run_bl_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    text = bl_cli.run_bl(GOOD, is_string=True)
    out = capsys.readouterr().out
    assert text == "PROGRAM p IS\n\nBEGIN\n  move\nEND p"
    assert out == text + "\n"


def test_run_bl_file_input(tmp_path: Path, sample_source: str) -> None:
    file_path = tmp_path / "hop.bl"
    file_path.write_text(sample_source)
    assert bl_cli.run_bl(str(file_path)) + "\n" == sample_source


def test_run_bl_rejects_other_extensions() -> None:
    with pytest.raises(ValueError, match="Only .bl files are supported."):
        bl_cli.run_bl("program.txt")


def test_run_bl_writes_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_path = tmp_path / "out.bl"
    bl_cli.run_bl(GOOD, is_string=True, out=str(out_path))
    assert capsys.readouterr().out == ""
    assert out_path.read_text().startswith("PROGRAM p IS")


def test_run_bl_tokens() -> None:
    text = bl_cli.run_bl("PROGRAM p", is_string=True, show_tokens=True)
    lines = text.splitlines()
    assert lines[0] == "1:1\tKEYWORD\tPROGRAM"
    assert lines[1] == "1:9\tIDENTIFIER\tp"
    assert lines[2].split("\t")[1] == "END_OF_INPUT"


def test_run_bl_json() -> None:
    data = json.loads(bl_cli.run_bl(GOOD, is_string=True, as_json=True))
    assert data["name"] == "p"
    assert data["body"]["children"] == [
        {"kind": "CALL", "value": "move", "children": []}
    ]


def test_run_bl_nested(nested_source: str) -> None:
    text = bl_cli.run_bl(nested_source, is_string=True, nested=True)
    assert "WHILE true DO" in text


def test_main_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert bl_cli.main(["-s", GOOD]) == 0
    assert "END p" in capsys.readouterr().out


def test_main_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert bl_cli.main(["-s", BAD]) == 1
    err = capsys.readouterr().err
    assert err.startswith("[error] >>> ")
    assert "closed with 'q'" in err


def test_main_strict_flag(capsys: pytest.CaptureFixture[str]) -> None:
    src = "PROGRAM p IS INSTRUCTION a DO move END a BEGIN END p"
    assert bl_cli.main(["-s", src]) == 0
    assert bl_cli.main(["-s", src, "--strict"]) == 1
    assert "Expected 'IS'" in capsys.readouterr().err


def test_main_verbose_configures_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    assert bl_cli.main(["-s", GOOD, "-v"]) == 0
    assert calls and calls[0]["level"] == logging.DEBUG


def test_main_missing_source_exits() -> None:
    with pytest.raises(SystemExit):
        bl_cli.main([])
