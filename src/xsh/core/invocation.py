"""Invocation scope and on-demand calls.

Every dispatcher call runs inside :func:`invocation`. The outermost call
builds an :class:`Invocation` (selectors read from the environment, resolver,
loader, and the set of LPUCs imported only to serve a direct call). Nested
calls, such as a unit calling ``xsh.xsh(...)``, reuse it and bump ``depth``.
When the outermost call unwinds, the transient LPUCs are unimported, the
resolver and loader are dropped, the selectors are cleared, and the current
invocation goes back to ``None``.
"""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Set

from xsh.core.callables import CALLABLES, CallableTable
from xsh.core.config.domains import LibrariesConfig
from xsh.core.exceptions import XshError
from xsh.core.loader import Loader
from xsh.core.naming import lpuc_of
from xsh.core.paths import resolve_xsh_home
from xsh.core.resolver import Resolver
from xsh.core.selectors import DEBUG_ENV, DEV_ENV, NO_SELECTOR, Selector

logger = logging.getLogger(__name__)


@dataclass
class Invocation:
    xsh_home: Path
    default_library: str
    debug: Selector
    dev: Selector
    resolver: Optional[Resolver]
    loader: Optional[Loader]
    table: CallableTable
    transient: Set[str] = field(default_factory=set)
    depth: int = 0

    @property
    def active(self) -> bool:
        return self.loader is not None

    def keep(self, lpuc: str) -> None:
        """Mark an LPUC as explicitly imported: it survives teardown."""
        self.transient.discard(lpuc)


_current: ContextVar[Optional[Invocation]] = ContextVar("xsh_invocation", default=None)


def current_invocation() -> Optional[Invocation]:
    return _current.get()


def _begin(
    xsh_home: Optional[Path],
    environ: Optional[Mapping[str, str]],
    debug: Optional[Selector],
    dev: Optional[Selector],
    table: CallableTable,
) -> Invocation:
    home = Path(xsh_home) if xsh_home is not None else resolve_xsh_home(environ)
    default_library = LibrariesConfig(xsh_home=home).default_library
    if debug is None:
        debug = Selector.from_env(DEBUG_ENV, environ, default_library=default_library)
    if dev is None:
        dev = Selector.from_env(DEV_ENV, environ, default_library=default_library)
    resolver = Resolver(home, dev=dev)
    loader = Loader(resolver, table, debug=debug)
    return Invocation(
        xsh_home=home,
        default_library=default_library,
        debug=debug,
        dev=dev,
        resolver=resolver,
        loader=loader,
        table=table,
    )


def _teardown(inv: Invocation) -> None:
    if inv.loader is not None:
        for lpuc in sorted(inv.transient):
            inv.loader.unimport_unit(lpuc)
    inv.transient.clear()
    inv.resolver = None
    inv.loader = None
    inv.debug = NO_SELECTOR
    inv.dev = NO_SELECTOR


@contextmanager
def invocation(
    *,
    xsh_home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    debug: Optional[Selector] = None,
    dev: Optional[Selector] = None,
    table: CallableTable = CALLABLES,
) -> Iterator[Invocation]:
    """Enter (or re-enter) the current invocation.

    Selector arguments only take effect on the outermost call.

    Raises:
        EnvironmentMisconfiguredError: ``XSH_HOME`` is unusable (outermost call only).
    """
    inv = _current.get()
    if inv is not None:
        inv.depth += 1
        try:
            yield inv
        finally:
            inv.depth -= 1
        return

    inv = _begin(xsh_home, environ, debug, dev, table)
    inv.depth = 1
    token = _current.set(inv)
    try:
        yield inv
    finally:
        inv.depth -= 1
        try:
            _teardown(inv)
        finally:
            _current.reset(token)


def _fold(status: int) -> int:
    # Exit statuses are one byte; keep out-of-range failures non-zero.
    return status if 0 <= status <= 255 else 1


def exit_status(result: Any) -> int:
    """Map a unit's return value to an exit status.

    ``None`` is success, ``bool`` maps True/False to 0/1, ``int`` is the status
    itself (1 when outside 0..255); anything else is printed to stdout and
    counts as success.
    """
    if result is None:
        return 0
    if isinstance(result, bool):
        return 0 if result else 1
    if isinstance(result, int):
        return _fold(result)
    print(result)
    return 0


def _system_exit_status(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return _fold(code)
    print(code, file=sys.stderr)
    return 1


def direct_call(inv: Invocation, lpue: str, args: List[str]) -> int:
    """Call the unit named by ``lpue`` with ``args``.

    Uses the imported LPUC when present (re-running its runtime init files);
    otherwise imports the unit for the duration of the invocation.

    Raises:
        UnitNotFoundError: Nothing resolves and nothing is imported.
        AmbiguousUnitError: ``lpue`` resolves to more than one unit.
    """
    if inv.loader is None or inv.resolver is None:
        raise XshError("Invocation already finished")
    lpuc = lpuc_of(lpue, inv.default_library)
    entry = inv.table.get(lpuc)
    if entry is None:
        unit = inv.resolver.unit(lpue)
        entry = inv.loader.import_unit(unit)
        inv.transient.add(entry.lpuc)
    else:
        inv.loader.refresh_runtime(entry)

    trace = inv.debug.matches(entry.lpue)
    try:
        result = entry.call(list(args), trace=trace)
    except SystemExit as exc:
        return _system_exit_status(exc)
    except XshError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.debug("Unit %s raised", entry.lpue, exc_info=True)
        print(f"Error: {entry.lpue}: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    return exit_status(result)


__all__ = [
    "Invocation",
    "invocation",
    "current_invocation",
    "direct_call",
    "exit_status",
]
