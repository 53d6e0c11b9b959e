"""
xsh list command.

SUMMARY: List units of the loaded libraries, grouped by library and kind
"""

from __future__ import annotations

import argparse
from typing import Dict, List

from xsh.cli import OutputFormatter, add_json_flag, get_invocation
from xsh.core.exceptions import UnitNotFoundError
from xsh.core.libraries import LibraryRegistry
from xsh.core.naming import FUNCTIONS, SCRIPTS
from xsh.core.resolver import Unit

SUMMARY = "List units of the loaded libraries, grouped by library and kind"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "pattern",
        nargs="?",
        metavar="LPUR",
        help="Only list units matching this pattern (default: everything)",
    )
    parser.add_argument(
        "-l",
        "--libraries",
        action="store_true",
        help="List loaded libraries with their versions instead of units",
    )
    add_json_flag(parser)


def group_units(units: List[Unit]) -> Dict[str, Dict[str, List[str]]]:
    """Group units as {library: {kind: [package/util, ...]}}, empty kinds omitted."""
    grouped: Dict[str, Dict[str, List[str]]] = {}
    for unit in units:
        kinds = grouped.setdefault(unit.library, {})
        kinds.setdefault(unit.kind, []).append(unit.package_util)
    return {
        lib: {kind: sorted(grouped[lib][kind]) for kind in (FUNCTIONS, SCRIPTS) if grouped[lib].get(kind)}
        for lib in sorted(grouped)
    }


def _list_libraries(formatter: OutputFormatter) -> int:
    inv = get_invocation()
    libs = LibraryRegistry(inv.xsh_home).libraries()
    if formatter.json_mode:
        formatter.json_output({"libraries": [lib.to_dict() for lib in libs]})
        return 0
    for lib in libs:
        line = f"{lib.name} ({lib.version or 'unknown'})"
        if lib.url:
            line += f" {lib.url}"
        if lib.dev_root:
            line += f" [dev: {lib.dev_root}]"
        formatter.text(line)
    return 0


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    if getattr(args, "libraries", False):
        return _list_libraries(formatter)

    inv = get_invocation()
    pattern = args.pattern or "*"
    units = inv.resolver.units(pattern)
    if not units and args.pattern:
        raise UnitNotFoundError(f"No units match: {args.pattern}", context={"lpur": args.pattern})

    grouped = group_units(units)
    if formatter.json_mode:
        formatter.json_output({"libraries": grouped})
        return 0
    for lib, kinds in grouped.items():
        formatter.text(f"[{lib}]")
        for kind, names in kinds.items():
            formatter.text(f"  {kind}:")
            for name in names:
                formatter.text(f"    {name}")
    return 0

