from __future__ import annotations

import json

import pytest

from xsh.cli._output import OutputFormatter, format_json
from xsh.core.exceptions import UnitNotFoundError

pytestmark = pytest.mark.fast


def test_text_success_and_error(capsys: pytest.CaptureFixture[str]) -> None:
    fmt = OutputFormatter()
    fmt.success({"library": "x"}, "Loaded x")
    fmt.error(ValueError("nope"))
    captured = capsys.readouterr()
    assert captured.out == "Loaded x\n"
    assert captured.err == "Error: nope\n"


def test_json_success(capsys: pytest.CaptureFixture[str]) -> None:
    OutputFormatter(json_mode=True).success({"library": "x"}, "Loaded x")
    assert json.loads(capsys.readouterr().out) == {"status": "success", "library": "x"}


def test_json_error_carries_xsh_context(capsys: pytest.CaptureFixture[str]) -> None:
    err = UnitNotFoundError("Unit not found: x/a/b", context={"lpue": "x/a/b"})
    OutputFormatter(json_mode=True).error(err)
    payload = json.loads(capsys.readouterr().err)
    assert payload == {
        "error": "UnitNotFoundError",
        "message": "Unit not found: x/a/b",
        "context": {"lpue": "x/a/b"},
    }


def test_json_error_plain_exception(capsys: pytest.CaptureFixture[str]) -> None:
    OutputFormatter(json_mode=True).error(RuntimeError("boom"), error_code="runtime")
    assert json.loads(capsys.readouterr().err) == {"error": "runtime", "message": "boom"}


def test_format_json_handles_paths() -> None:
    from pathlib import Path

    assert json.loads(format_json({"p": Path("/a/b")})) == {"p": "/a/b"}
