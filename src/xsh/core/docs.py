"""Documentation block extraction.

A function unit's documentation is the contiguous run of ``#?`` lines directly
above its ``def`` (or its first decorator). A script unit's documentation is
every ``#?`` line in the file. The marker and one following space are
stripped; everything else is kept verbatim.
"""
from __future__ import annotations

import ast
from pathlib import Path
from typing import List, Optional

from xsh.data import read_text

DOC_MARKER = "#?"


def strip_marker(line: str, marker: str = DOC_MARKER) -> str:
    text = line.lstrip()[len(marker):]
    return text[1:] if text.startswith(" ") else text


def _is_doc(line: str, marker: str) -> bool:
    return line.lstrip().startswith(marker)


def _declaration_line(source: str, util: str) -> Optional[int]:
    """Return the 0-based line index where ``def util`` (with decorators) starts."""
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return None
    for node in tree.body:
        if isinstance(node, ast.FunctionDef) and node.name == util:
            first = min([node.lineno, *(d.lineno for d in node.decorator_list)])
            return first - 1
    return None


def function_doc(source: str, util: str, marker: str = DOC_MARKER) -> List[str]:
    lines = source.splitlines()
    index = _declaration_line(source, util)
    if index is None:
        return script_doc(source, marker)
    block: List[str] = []
    i = index - 1
    while i >= 0 and _is_doc(lines[i], marker):
        block.append(strip_marker(lines[i], marker))
        i -= 1
    block.reverse()
    return block


def script_doc(source: str, marker: str = DOC_MARKER) -> List[str]:
    return [strip_marker(line, marker) for line in source.splitlines() if _is_doc(line, marker)]


def unit_doc(path: Path, *, is_function: bool, util: str, marker: str = DOC_MARKER) -> List[str]:
    """Return the documentation lines of the unit at ``path``."""
    source = Path(path).read_text(encoding="utf-8", errors="replace")
    if is_function:
        return function_doc(source, util, marker)
    return script_doc(source, marker)


def usage(marker: str = DOC_MARKER) -> str:
    """Return the framework usage block."""
    return "\n".join(script_doc(read_text("help", "usage.txt"), marker))


__all__ = ["DOC_MARKER", "strip_marker", "function_doc", "script_doc", "unit_doc", "usage"]
