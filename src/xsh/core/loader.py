"""Import resolved units into the process-wide callable table.

A function unit file must declare exactly one top-level ``def <util>``. Its
init chain runs first; the file then executes as a fresh module (never entered
in ``sys.modules``) with the init namespace as its starting globals, and the
declared function is registered under the unit's LPUC.

A script unit is exposed as ``<XSH_HOME>/bin/<lpuc>``, a symlink to the
script, and registered as a :class:`ScriptRunner`.
"""
from __future__ import annotations

import ast
import logging
from contextlib import nullcontext
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Union

from xsh.core.callables import CALLABLES, CallableEntry, CallableTable, ScriptRunner
from xsh.core.config.domains import LibrariesConfig, UnitsConfig
from xsh.core.exceptions import InvalidNameError, UnitDefinitionError, UnitNotFoundError, XshError
from xsh.core.initfiles import get_init_files, run_init_chain
from xsh.core.naming import lpuc_of
from xsh.core.resolver import Resolver, Unit
from xsh.core.selectors import NO_SELECTOR, Selector, lpur_matches
from xsh.core.tracing import trace_files
from xsh.core.utils.loader import load_module_from_path

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[str, BaseException], None]


def check_declaration(source: str, util: str, path: Path) -> None:
    """Require exactly one top-level ``def <util>`` in ``source``.

    Raises:
        UnitDefinitionError: Missing, duplicated, or unparsable declaration.
    """
    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as exc:
        raise UnitDefinitionError(
            f"{path}:{exc.lineno}: {exc.msg}",
            context={"path": str(path)},
        ) from exc
    found = [
        node for node in tree.body
        if isinstance(node, ast.FunctionDef) and node.name == util
    ]
    if len(found) != 1:
        raise UnitDefinitionError(
            f"{path} must define exactly one function named {util!r} (found {len(found)})",
            context={"path": str(path), "util": util, "count": len(found)},
        )


class Loader:
    """Import and unimport units for one invocation."""

    def __init__(
        self,
        resolver: Resolver,
        table: CallableTable = CALLABLES,
        *,
        debug: Selector = NO_SELECTOR,
    ) -> None:
        self.resolver = resolver
        self.table = table
        self.debug = debug
        xsh_home = resolver.xsh_home
        units = UnitsConfig(xsh_home=xsh_home)
        self.init_name = units.init_file
        self.runtime_name = units.runtime_init_file
        self.bin_root = LibrariesConfig(xsh_home=xsh_home).bin_root

    # ----- single unit -----

    def import_unit(self, unit: Union[Unit, Path], lpue: Optional[str] = None) -> CallableEntry:
        """Import one unit; re-importing replaces the existing entry."""
        if not isinstance(unit, Unit):
            unit = self._unit_for_path(Path(unit), lpue)
        if unit.is_function:
            entry = self._import_function(unit)
        else:
            entry = self._import_script(unit)
        self.table.register(entry)
        logger.debug("Imported %s as %s", unit.lpue, entry.lpuc)
        return entry

    def _unit_for_path(self, path: Path, lpue: Optional[str]) -> Unit:
        if lpue is None:
            try:
                lpue = self.resolver.lpue_for_path(path)
            except InvalidNameError as exc:
                raise UnitNotFoundError(str(exc), context=exc.context) from exc
        resolved = path.resolve()
        for candidate in self.resolver.units(lpue):
            if candidate.path.resolve() == resolved:
                return candidate
        raise UnitNotFoundError(f"Not a unit of any loaded library: {path}", context={"path": str(path)})

    def _import_function(self, unit: Unit) -> CallableEntry:
        source = unit.path.read_text(encoding="utf-8")
        check_declaration(source, unit.util, unit.path)

        chain = get_init_files(
            unit.path,
            unit.kind_root,
            init_name=self.init_name,
            runtime_name=self.runtime_name,
        )
        traced = (unit.path, *(i.path for i in chain))
        tracing = trace_files(traced) if self.debug.matches(unit.lpue) else nullcontext()
        with tracing:
            namespace = run_init_chain(chain, unit.kind_root)
            module = load_module_from_path(unit.path, "xsh.units", name=unit.lpuc, seed=namespace)

        fn = getattr(module, unit.util, None)
        if not callable(fn):
            raise UnitDefinitionError(
                f"{unit.path}: {unit.util!r} is not callable after execution",
                context={"path": str(unit.path), "util": unit.util},
            )
        return CallableEntry(
            lpuc=unit.lpuc,
            lpue=unit.lpue,
            kind=unit.kind,
            path=unit.path,
            name=fn.__name__,
            target=fn,
            traced_files=traced,
            init_chain=tuple(chain),
            functions_root=unit.kind_root,
            namespace=vars(module),
        )

    def _import_script(self, unit: Unit) -> CallableEntry:
        self.bin_root.mkdir(parents=True, exist_ok=True)
        link = self.bin_root / unit.lpuc
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(unit.path)
        return CallableEntry(
            lpuc=unit.lpuc,
            lpue=unit.lpue,
            kind=unit.kind,
            path=unit.path,
            name=unit.path.name,
            target=ScriptRunner(unit.path),
            link=link,
            traced_files=(unit.path,),
        )

    def refresh_runtime(self, entry: CallableEntry) -> None:
        """Re-run the runtime init files of an already imported function unit."""
        if not entry.is_function or not any(i.is_runtime for i in entry.init_chain):
            return
        tracing = (
            trace_files(entry.traced_files) if self.debug.matches(entry.lpue) else nullcontext()
        )
        with tracing:
            namespace = run_init_chain(list(entry.init_chain), entry.functions_root or entry.path.parent)
        if entry.namespace is not None:
            entry.namespace.update(namespace)

    def unimport_unit(self, value: Union[Unit, Path, str]) -> bool:
        """Remove an LPUC and its bin link. Returns False if it was not imported."""
        if isinstance(value, Unit):
            lpuc = value.lpuc
        elif isinstance(value, Path):
            lpuc = lpuc_of(self.resolver.lpue_for_path(value))
        elif "/" in value:
            lpuc = lpuc_of(value, self.resolver.default_library)
        else:
            lpuc = value
        entry = self.table.remove(lpuc)
        link = entry.link if entry and entry.link else self.bin_root / lpuc
        if link.is_symlink():
            link.unlink()
        if entry is not None:
            logger.debug("Unimported %s", lpuc)
        return entry is not None

    # ----- batch forms -----

    def imports(
        self,
        patterns: Iterable[str],
        *,
        on_error: Optional[ErrorHandler] = None,
        on_import: Optional[Callable[[CallableEntry], None]] = None,
    ) -> int:
        """Import every unit each pattern resolves to.

        Never stops at a failing item. Returns the number of failures.
        """
        status = 0
        for pattern in patterns:
            try:
                units = self.resolver.units(pattern)
                if not units:
                    raise UnitNotFoundError(f"Unit not found: {pattern}", context={"lpue": pattern})
            except XshError as exc:
                status += self._fail(pattern, exc, on_error)
                continue
            for unit in units:
                try:
                    entry = self.import_unit(unit)
                except Exception as exc:
                    status += self._fail(unit.lpue, exc, on_error)
                    continue
                if on_import is not None:
                    on_import(entry)
        return status

    def imported_matching(self, pattern: str) -> List[str]:
        """LPUCs in the table whose LPUE matches ``pattern``."""
        default = self.resolver.default_library
        return [
            e.lpuc for e in self.table.entries()
            if lpur_matches(pattern, e.lpue, default)
        ]

    def unimports(self, patterns: Iterable[str], *, on_error: Optional[ErrorHandler] = None) -> int:
        """Unimport every unit each pattern names.

        A pattern counts as not found only when it resolves to no unit and
        matches no imported LPUE.
        """
        status = 0
        for pattern in patterns:
            try:
                lpucs: Set[str] = {u.lpuc for u in self.resolver.units(pattern)}
                lpucs.update(self.imported_matching(pattern))
                if not lpucs:
                    raise UnitNotFoundError(f"Unit not found: {pattern}", context={"lpue": pattern})
            except XshError as exc:
                status += self._fail(pattern, exc, on_error)
                continue
            for lpuc in sorted(lpucs):
                self.unimport_unit(lpuc)
        return status

    @staticmethod
    def _fail(item: str, exc: BaseException, on_error: Optional[ErrorHandler]) -> int:
        logger.debug("Failed on %s: %s", item, exc)
        if on_error is not None:
            on_error(item, exc)
        return 1


__all__ = ["Loader", "check_declaration"]
