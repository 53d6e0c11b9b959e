from __future__ import annotations

from pathlib import Path

import pytest

from xsh.core.docs import function_doc, script_doc, strip_marker, unit_doc, usage

pytestmark = pytest.mark.fast


def test_strip_marker_keeps_indentation_after_one_space() -> None:
    assert strip_marker("#?   upper STRING") == "  upper STRING"
    assert strip_marker("#?") == ""
    assert strip_marker("    #?x") == "x"


def test_function_doc_is_block_above_declaration() -> None:
    source = (
        "#? stray line\n"
        "import os\n"
        "\n"
        "#? Usage:\n"
        "#?   upper STRING\n"
        "def upper(s):\n"
        "    #? not documentation\n"
        "    return s.upper()\n"
    )
    assert function_doc(source, "upper") == ["Usage:", "  upper STRING"]


def test_function_doc_above_decorator() -> None:
    source = "import functools\n\n#? Cached.\n@functools.lru_cache\ndef cached():\n    return 1\n"
    assert function_doc(source, "cached") == ["Cached."]


def test_function_doc_missing_is_empty() -> None:
    assert function_doc("def plain():\n    pass\n", "plain") == []


def test_script_doc_collects_every_marker_line() -> None:
    source = "#!/bin/sh\n#? Usage: run\necho hi\n#? More.\n"
    assert script_doc(source) == ["Usage: run", "More."]


def test_custom_marker() -> None:
    assert script_doc("## a\n#? b\n", marker="##") == ["a"]


def test_unit_doc_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "greet.py"
    path.write_text("#? Say hello.\ndef greet():\n    pass\n", encoding="utf-8")
    assert unit_doc(path, is_function=True, util="greet") == ["Say hello."]


def test_usage_lists_commands() -> None:
    text = usage()
    assert text.startswith("Usage:")
    for command in ("list", "load", "unload", "update", "imports", "unimports", "calls", "help", "debug", "version"):
        assert f"xsh {command}" in text or f"|{command}" in text
    assert "#?" not in text
