"""Directory-scoped init files for function units.

Every directory of a library's ``functions/`` tree may hold:

* ``__init__.py``    static; executed once per process per file
* ``__runtime__.py`` runtime; executed on every use of a unit in scope

The public names an init file defines become globals of every function unit
beneath it. Chains are discovered nearest-first and executed farthest-first,
so a nearer init file shadows names of a farther one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from xsh.core.utils.loader import load_module_from_path, public_names

logger = logging.getLogger(__name__)

STATIC = "static"
RUNTIME = "runtime"

# Resolved init file path -> public names of its single static run.
_static_namespaces: Dict[Path, Dict[str, Any]] = {}


@dataclass(frozen=True, slots=True)
class InitFile:
    path: Path
    mode: str

    @property
    def is_runtime(self) -> bool:
        return self.mode == RUNTIME


def get_init_files(
    unit_path: Path,
    functions_root: Path,
    *,
    init_name: str = "__init__.py",
    runtime_name: str = "__runtime__.py",
) -> List[InitFile]:
    """Return the init chain of ``unit_path``, nearest directory first.

    Within one directory the runtime file is listed before the static one.
    The walk stops at ``functions_root`` (inclusive).
    """
    root = Path(functions_root)
    chain: List[InitFile] = []
    directory = Path(unit_path).parent
    while True:
        for name, mode in ((runtime_name, RUNTIME), (init_name, STATIC)):
            candidate = directory / name
            if candidate.is_file():
                chain.append(InitFile(candidate, mode))
        if directory == root or directory.parent == directory:
            break
        try:
            directory.relative_to(root)
        except ValueError:
            break
        directory = directory.parent
    return chain


def _module_key(init: InitFile, functions_root: Path) -> str:
    try:
        rel = init.path.relative_to(functions_root)
    except ValueError:
        rel = Path(init.path.name)
    return "/".join(rel.with_suffix("").parts)


def run_init_chain(chain: List[InitFile], functions_root: Path) -> Dict[str, Any]:
    """Execute ``chain`` farthest-first and return the merged namespace.

    Static files already executed in this process contribute their recorded
    names without running again. Runtime files always run.
    """
    namespace: Dict[str, Any] = {}
    for init in reversed(chain):
        key = init.path.resolve()
        if not init.is_runtime and key in _static_namespaces:
            namespace.update(_static_namespaces[key])
            continue
        logger.debug("Running %s init file %s", init.mode, init.path)
        module = load_module_from_path(
            init.path,
            "xsh.init",
            name=_module_key(init, functions_root),
            seed=namespace,
        )
        names = public_names(module)
        if not init.is_runtime:
            _static_namespaces[key] = names
        namespace.update(names)
    return namespace


def static_init_files_run() -> List[Path]:
    return sorted(_static_namespaces)


def clear_static_cache() -> None:
    """Forget which static init files ran (tests only)."""
    _static_namespaces.clear()


__all__ = [
    "STATIC",
    "RUNTIME",
    "InitFile",
    "get_init_files",
    "run_init_chain",
    "static_init_files_run",
    "clear_static_cache",
]
