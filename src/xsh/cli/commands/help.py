"""
xsh help command.

SUMMARY: Show framework usage, or the documentation of matching units
"""

from __future__ import annotations

import argparse
from typing import Any, Dict, List

from xsh.cli import OutputFormatter, add_json_flag, get_invocation
from xsh.core.config.domains import UnitsConfig
from xsh.core.docs import unit_doc, usage
from xsh.core.exceptions import UnitNotFoundError

SUMMARY = "Show framework usage, or the documentation of matching units"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "pattern",
        nargs="?",
        metavar="LPUE|LPUR",
        help="Units to document (default: framework usage)",
    )
    parser.add_argument(
        "-c",
        "--code",
        action="store_true",
        help="Show unit source code instead of documentation",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    if not args.pattern:
        formatter.text(usage())
        return 0

    inv = get_invocation()
    marker = UnitsConfig(xsh_home=inv.xsh_home).doc_marker
    units = inv.resolver.units(args.pattern)
    if not units:
        raise UnitNotFoundError(f"Unit not found: {args.pattern}", context={"lpue": args.pattern})

    rows: List[Dict[str, Any]] = []
    for unit in units:
        if args.code:
            body = unit.path.read_text(encoding="utf-8", errors="replace").splitlines()
        else:
            body = unit_doc(unit.path, is_function=unit.is_function, util=unit.util, marker=marker)
        rows.append({"lpue": unit.lpue, "kind": unit.kind, "path": str(unit.path), "lines": body})

    if formatter.json_mode:
        formatter.json_output({"units": rows})
        return 0

    for i, row in enumerate(rows):
        if i:
            formatter.text("")
        formatter.text(f"[{row['lpue']}]")
        for line in row["lines"]:
            formatter.text(line)
    return 0
