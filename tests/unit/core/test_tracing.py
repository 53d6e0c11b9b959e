from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from helpers.library import write_unit
from xsh.core.tracing import script_command, trace_files
from xsh.core.utils.loader import load_module_from_path


def test_trace_files_reports_watched_lines_only(tmp_path: Path) -> None:
    path = write_unit(tmp_path, "double.py", "def double(n):\n    result = n * 2\n    return result\n")
    module = load_module_from_path(path)
    out = io.StringIO()

    with trace_files([path], stream=out):
        assert module.double(4) == 8
        len("untraced")

    lines = out.getvalue().splitlines()
    assert lines == [
        "+ double.py:2:     result = n * 2",
        "+ double.py:3:     return result",
    ]


def test_trace_files_restores_previous_tracer(tmp_path: Path) -> None:
    path = write_unit(tmp_path, "noop.py", "def noop():\n    pass\n")
    before = sys.gettrace()
    with trace_files([path], stream=io.StringIO()):
        pass
    assert sys.gettrace() is before


@pytest.mark.fast
def test_script_command_plain() -> None:
    assert script_command(Path("/s/run.sh"), ["a", 1]) == ["/s/run.sh", "a", "1"]


@pytest.mark.fast
def test_script_command_traces_shell_with_bash_x() -> None:
    assert script_command(Path("/s/run.sh"), ["a"], trace=True) == ["bash", "-x", "/s/run.sh", "a"]


@pytest.mark.fast
def test_script_command_echoes_other_scripts() -> None:
    out = io.StringIO()
    argv = script_command(Path("/s/run.py"), ["a"], trace=True, stream=out)
    assert argv == ["/s/run.py", "a"]
    assert out.getvalue() == "+ /s/run.py a\n"
