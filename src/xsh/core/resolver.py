"""Resolve LPUEs and LPURs to unit files.

For each library matching the library segment, the package/util segment is
searched as::

    functions/<pue><function_suffix>
    functions/<pue>/**/*<function_suffix>
    scripts/<pue><script_suffix>
    scripts/<pue>/**/*<script_suffix>

Both segments may contain glob characters. Names starting with ``__`` (init
files, caches) or ``.`` are never units. Units whose LPUE matches the dev
selector come from ``<XSH_DEV_HOME>/<lib>`` when that link exists.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from xsh.core.config.domains import LibrariesConfig, UnitsConfig
from xsh.core.exceptions import AmbiguousUnitError, InvalidNameError, UnitNotFoundError
from xsh.core.naming import FUNCTIONS, SCRIPTS, complete, lpuc_of, lpue_of, split
from xsh.core.selectors import NO_SELECTOR, Selector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Unit:
    """A resolved unit file."""

    lpue: str
    kind: str
    path: Path
    library_root: Path

    @property
    def library(self) -> str:
        return self.lpue.split("/", 1)[0]

    @property
    def package_util(self) -> str:
        return self.lpue.split("/", 1)[1]

    @property
    def util(self) -> str:
        return self.lpue.rsplit("/", 1)[-1]

    @property
    def lpuc(self) -> str:
        return lpuc_of(self.lpue)

    @property
    def kind_root(self) -> Path:
        """The ``functions/`` or ``scripts/`` directory holding this unit."""
        return self.library_root / self.kind

    @property
    def is_function(self) -> bool:
        return self.kind == FUNCTIONS


def _hidden(rel: Path) -> bool:
    return any(part.startswith("__") or part.startswith(".") for part in rel.parts)


class Resolver:
    """Map LPUE/LPUR strings to :class:`Unit` records across loaded libraries."""

    def __init__(
        self,
        xsh_home: Optional[Path] = None,
        *,
        dev: Selector = NO_SELECTOR,
    ) -> None:
        libs = LibrariesConfig(xsh_home=xsh_home)
        units = UnitsConfig(xsh_home=xsh_home)
        self.xsh_home = libs.xsh_home
        self.default_library = libs.default_library
        self.lib_root = libs.lib_root
        self.dev_root = libs.dev_root
        self.function_suffix = units.function_suffix
        self.script_suffixes = units.script_suffixes
        self.dev = dev

    def complete(self, lpue: str) -> str:
        return complete(lpue, self.default_library)

    # ----- search -----

    def _library_names(self, root: Path, pattern: str) -> List[str]:
        if not root.is_dir():
            return []
        return sorted(
            p.name for p in root.iterdir()
            if p.is_dir() and not p.name.startswith(".") and fnmatchcase(p.name, pattern)
        )

    def _search_kind(self, base: Path, pue: str, suffixes: Iterable[str]) -> Iterator[Path]:
        if not base.is_dir():
            return
        suffixes = tuple(suffixes)
        for suffix in suffixes:
            for p in base.glob(f"{pue}{suffix}"):
                if p.is_file():
                    yield p
        for d in base.glob(pue):
            if not d.is_dir():
                continue
            for p in d.rglob("*"):
                if p.is_file() and p.suffix in suffixes:
                    yield p

    def _search(self, lib_root: Path, pue: str) -> Iterator[Tuple[str, Path]]:
        for kind, suffixes in (
            (FUNCTIONS, (self.function_suffix,)),
            (SCRIPTS, self.script_suffixes),
        ):
            base = lib_root / kind
            for p in self._search_kind(base, pue, suffixes):
                if _hidden(p.relative_to(base)):
                    continue
                yield kind, p

    def _units_in(self, root: Path, lib: str, pue: str) -> Dict[Tuple[str, str], Unit]:
        found: Dict[Tuple[str, str], Unit] = {}
        lib_root = root / lib
        for kind, p in self._search(lib_root, pue):
            lpue = lpue_of(p, root=root)
            found[(kind, lpue)] = Unit(lpue=lpue, kind=kind, path=p, library_root=lib_root)
        return found

    def units(self, expr: str) -> List[Unit]:
        """Resolve ``expr`` to units sorted by path. Empty when nothing matches."""
        lib_pattern, pue = split(expr, self.default_library)
        names = set(self._library_names(self.lib_root, lib_pattern))
        if self.dev.active:
            names.update(self._library_names(self.dev_root, lib_pattern))

        found: Dict[Tuple[str, str], Unit] = {}
        for lib in sorted(names):
            normal = self._units_in(self.lib_root, lib, pue)
            if self.dev.active and (self.dev_root / lib).is_dir():
                for key in [k for k in normal if self.dev.matches(k[1])]:
                    del normal[key]
                for key, unit in self._units_in(self.dev_root, lib, pue).items():
                    if self.dev.matches(key[1]):
                        normal[key] = unit
            found.update(normal)

        result = sorted(found.values(), key=lambda u: str(u.path))
        logger.debug("Resolved %s -> %d unit(s)", expr, len(result))
        return result

    def lpue_for_path(self, path: Path) -> str:
        """Return the LPUE of a unit file under the library or dev-override root.

        Raises:
            InvalidNameError: ``path`` is not ``<root>/<lib>/<kind>/...``.
        """
        path = Path(path)
        for candidate in (path, path.resolve()):
            for root in (self.lib_root, self.dev_root):
                for anchor in (root, root.resolve()):
                    try:
                        return lpue_of(candidate, root=anchor)
                    except InvalidNameError:
                        continue
        raise InvalidNameError(
            f"Not a unit of any loaded library: {path}",
            context={"path": str(path)},
        )

    def resolve(self, expr: str) -> List[Path]:
        return [u.path for u in self.units(expr)]

    def unit(self, lpue: str) -> Unit:
        """Resolve an LPUE that must name exactly one unit.

        Raises:
            UnitNotFoundError: Nothing matches.
            AmbiguousUnitError: More than one unit matches.
        """
        matches = self.units(lpue)
        if not matches:
            raise UnitNotFoundError(f"Unit not found: {lpue}", context={"lpue": lpue})
        if len(matches) > 1:
            raise AmbiguousUnitError(
                f"LPUE matches {len(matches)} units: {lpue}",
                context={"lpue": lpue, "matches": [u.lpue for u in matches]},
            )
        return matches[0]


__all__ = ["Unit", "Resolver"]
