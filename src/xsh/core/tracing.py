"""Execution tracing for units selected by ``XSH_DEBUG``.

Function units are traced line by line through :func:`sys.settrace`, limited
to the unit file and its init files. Shell scripts run under ``bash -x``; any
other script gets its command line echoed. Trace output goes to stderr with a
``+ `` prefix.
"""
from __future__ import annotations

import linecache
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO

TRACE_PREFIX = "+ "


@contextmanager
def trace_files(paths: Iterable[Path], stream: Optional[TextIO] = None) -> Iterator[None]:
    """Trace every line executed from ``paths`` while the block runs."""
    watched = {str(p) for p in paths}
    out = stream or sys.stderr

    def local(frame, event, arg):
        if event == "line":
            filename = frame.f_code.co_filename
            source = linecache.getline(filename, frame.f_lineno).rstrip()
            out.write(f"{TRACE_PREFIX}{Path(filename).name}:{frame.f_lineno}: {source}\n")
        return local

    def tracer(frame, event, arg):
        if event == "call" and frame.f_code.co_filename in watched:
            return local
        return None

    previous = sys.gettrace()
    sys.settrace(tracer)
    try:
        yield
    finally:
        sys.settrace(previous)


def script_command(path: Path, args: Iterable[str], *, trace: bool = False, stream: Optional[TextIO] = None) -> List[str]:
    """Return the argv that runs the script at ``path``."""
    argv = [str(path), *[str(a) for a in args]]
    if not trace:
        return argv
    if path.suffix == ".sh":
        return ["bash", "-x", *argv]
    (stream or sys.stderr).write(TRACE_PREFIX + " ".join(argv) + "\n")
    return argv


__all__ = ["TRACE_PREFIX", "trace_files", "script_command"]
