"""Name codec: LPUE / LPUR / LPUC / unit path conversions.

String transforms; only unanchored paths consult the registry roots:

* LPUE  ``x/string/upper``           one unit
* LPUR  ``x/string/*``, ``/string/``  a pattern over LPUEs (glob syntax)
* LPUC  ``x-string-upper``           the callable name of an imported unit
* path  ``<root>/x/functions/string/upper.py``

Strings are always treated as LPUE/LPUR; ``os.PathLike`` values as paths. A
path carries the unit kind (``functions``/``scripts``), an LPUE does not.

The LPUC mapping ``/`` -> ``-`` is lossy when a library, package or util name
itself contains ``-``; such names are not rejected.
"""
from __future__ import annotations

import os
import re
from pathlib import PurePath
from typing import Optional, Tuple, Union

from xsh.core.exceptions import InvalidNameError

FUNCTIONS = "functions"
SCRIPTS = "scripts"
KINDS = (FUNCTIONS, SCRIPTS)

DEFAULT_LIBRARY = "x"

NameOrPath = Union[str, "os.PathLike[str]"]

_SLASHES = re.compile(r"/+")


def complete(lpue: str, default_library: str = DEFAULT_LIBRARY) -> str:
    """Expand LPUE shorthand.

    * ``/string/upper`` -> ``x/string/upper`` (leading ``/``: default library)
    * ``x/string/``     -> ``x/string/*``     (trailing ``/``: whole package)
    * ``x``             -> ``x/*``            (bare name: whole library)

    Idempotent: ``complete(complete(s)) == complete(s)``.

    Raises:
        InvalidNameError: On empty input.
    """
    if lpue is None or not str(lpue).strip():
        raise InvalidNameError("LPUE must not be empty")
    s = _SLASHES.sub("/", str(lpue).strip())
    if s.startswith("/"):
        s = f"{default_library}{s}"
    if s.endswith("/"):
        s = f"{s}*"
    elif "/" not in s:
        s = f"{s}/*"
    return s


def split(lpue: str, default_library: str = DEFAULT_LIBRARY) -> Tuple[str, str]:
    """Return ``(library, package/util)`` of a completed LPUE or LPUR."""
    lib, _, pue = complete(lpue, default_library).partition("/")
    return lib, pue


def _parse_relative(parts: Tuple[str, ...], p: PurePath) -> Tuple[str, str, str]:
    """Parse ``<lib>/<kind>/<package...>/<util><suffix>`` parts."""
    if len(parts) < 3 or parts[1] not in KINDS:
        raise InvalidNameError(f"Not a unit path: {p}", context={"path": str(p)})
    rest = list(parts[2:])
    leaf = PurePath(rest[-1])
    rest[-1] = leaf.stem if leaf.suffix else leaf.name
    return parts[0], parts[1], "/".join(rest)


def registry_roots() -> Tuple[PurePath, ...]:
    """Library and dev-override roots of the current ``XSH_HOME``; empty when unset."""
    from xsh.core.config.domains import LibrariesConfig
    from xsh.core.exceptions import EnvironmentMisconfiguredError

    try:
        cfg = LibrariesConfig()
        return (cfg.lib_root, cfg.dev_root)
    except EnvironmentMisconfiguredError:
        return ()


def _parse_path(
    path: "os.PathLike[str]",
    root: Optional["os.PathLike[str]"] = None,
) -> Tuple[str, str, str]:
    """Return ``(library, kind, package/util)`` for a unit path.

    With ``root``, the path must be ``<root>/<lib>/<kind>/...``. Without it the
    path is anchored at the registry roots; a path outside them falls back to
    its leftmost ``<lib>/<kind>/...`` run.
    """
    p = PurePath(path)
    if root is not None:
        try:
            parts = p.relative_to(PurePath(root)).parts
        except ValueError as exc:
            raise InvalidNameError(f"Path is not under {root}: {p}") from exc
        return _parse_relative(parts, p)

    for anchor in registry_roots():
        try:
            parts = p.relative_to(anchor).parts
        except ValueError:
            continue
        return _parse_relative(parts, p)

    parts = p.parts
    for i, part in enumerate(parts):
        if part in KINDS and i >= 1 and i + 1 < len(parts):
            return _parse_relative(parts[i - 1:], p)
    raise InvalidNameError(f"Not a unit path: {p}", context={"path": str(p)})


def _is_path(value: NameOrPath) -> bool:
    return isinstance(value, os.PathLike)


def library_of(value: NameOrPath, default_library: str = DEFAULT_LIBRARY) -> str:
    if _is_path(value):
        return _parse_path(value)[0]
    return split(value, default_library)[0]


def package_util_of(value: NameOrPath, default_library: str = DEFAULT_LIBRARY) -> str:
    if _is_path(value):
        return _parse_path(value)[2]
    return split(value, default_library)[1]


def util_of(value: NameOrPath, default_library: str = DEFAULT_LIBRARY) -> str:
    return package_util_of(value, default_library).rsplit("/", 1)[-1]


def kind_of(path: "os.PathLike[str]") -> str:
    """Return ``functions`` or ``scripts`` for a unit path."""
    return _parse_path(path)[1]


def lpue_of(path: "os.PathLike[str]", root: Optional["os.PathLike[str]"] = None) -> str:
    lib, _kind, pue = _parse_path(path, root)
    return f"{lib}/{pue}"


def lpuc_of(value: NameOrPath, default_library: str = DEFAULT_LIBRARY) -> str:
    lpue = lpue_of(value) if _is_path(value) else complete(value, default_library)
    return lpue.replace("/", "-")


__all__ = [
    "FUNCTIONS",
    "SCRIPTS",
    "KINDS",
    "DEFAULT_LIBRARY",
    "complete",
    "split",
    "library_of",
    "package_util_of",
    "util_of",
    "kind_of",
    "lpue_of",
    "lpuc_of",
    "registry_roots",
]
