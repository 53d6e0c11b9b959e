"""Process-wide callable table.

Imported units are registered here under their LPUC. Function units store the
declared function object (its own name kept as metadata); script units store
a runner that executes the script as a child process.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from xsh.core.initfiles import InitFile
from xsh.core.naming import FUNCTIONS, SCRIPTS
from xsh.core.tracing import script_command, trace_files
from xsh.core.utils.subprocess import run_command

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Run a script unit by path, inheriting stdio. Returns the exit status."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __call__(self, *args: Any, trace: bool = False) -> int:
        argv = script_command(self.path, [str(a) for a in args], trace=trace)
        # Flush so parent output stays ordered before the child's.
        sys.stdout.flush()
        sys.stderr.flush()
        return run_command(argv).returncode

    def __repr__(self) -> str:
        return f"ScriptRunner({str(self.path)!r})"


@dataclass
class CallableEntry:
    """One registered LPUC.

    Attributes:
        lpuc: Table key, e.g. ``x-string-upper``
        lpue: Unit expression, e.g. ``x/string/upper``
        kind: ``functions`` or ``scripts``
        path: Unit source file
        name: The name the unit declares (function units) or its file name
        target: The function object or a :class:`ScriptRunner`
        link: ``<XSH_HOME>/bin/<lpuc>`` symlink (script units)
        traced_files: Files traced when the unit runs under debug
    """

    lpuc: str
    lpue: str
    kind: str
    path: Path
    name: str
    target: Callable[..., Any]
    link: Optional[Path] = None
    traced_files: Tuple[Path, ...] = field(default_factory=tuple)
    # Nearest-first; its runtime files re-run before every dispatcher call.
    init_chain: Tuple[InitFile, ...] = field(default_factory=tuple)
    functions_root: Optional[Path] = None
    # Module globals of a function unit; runtime init files refresh it.
    namespace: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def is_function(self) -> bool:
        return self.kind == FUNCTIONS

    @property
    def is_script(self) -> bool:
        return self.kind == SCRIPTS

    def call(self, args: List[str], *, trace: bool = False) -> Any:
        """Invoke the unit and return whatever it returns."""
        if self.is_script:
            return self.target(*args, trace=trace)
        if trace:
            with trace_files(self.traced_files or (self.path,)):
                return self.target(*args)
        return self.target(*args)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lpuc": self.lpuc,
            "lpue": self.lpue,
            "kind": self.kind,
            "path": str(self.path),
            "name": self.name,
            "link": str(self.link) if self.link else None,
        }


class CallableTable:
    """Mapping of LPUC -> :class:`CallableEntry`.

    Entries are only removed by an explicit unimport (or by the invocation
    teardown for units it imported on demand).
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CallableEntry] = {}

    def register(self, entry: CallableEntry) -> None:
        if entry.lpuc in self._entries:
            logger.debug("Replacing callable %s", entry.lpuc)
        self._entries[entry.lpuc] = entry

    def get(self, lpuc: str) -> Optional[CallableEntry]:
        return self._entries.get(lpuc)

    def remove(self, lpuc: str) -> Optional[CallableEntry]:
        return self._entries.pop(lpuc, None)

    def names(self) -> List[str]:
        return sorted(self._entries)

    def entries(self) -> List[CallableEntry]:
        return [self._entries[k] for k in sorted(self._entries)]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, lpuc: object) -> bool:
        return lpuc in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


# One table per process.
CALLABLES = CallableTable()


__all__ = [
    "ScriptRunner",
    "CallableEntry",
    "CallableTable",
    "CALLABLES",
]
