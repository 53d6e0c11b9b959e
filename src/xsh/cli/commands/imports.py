"""
xsh imports command.

SUMMARY: Import units into the process as callables (LPUC)
"""

from __future__ import annotations

import argparse
from typing import List

from xsh.cli import OutputFormatter, add_json_flag, add_patterns_arg, get_invocation, item_error_reporter
from xsh.core.callables import CallableEntry

SUMMARY = "Import units into the process as callables (LPUC)"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_patterns_arg(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    inv = get_invocation()
    imported: List[CallableEntry] = []

    def on_import(entry: CallableEntry) -> None:
        # Explicit imports outlive the invocation.
        inv.keep(entry.lpuc)
        imported.append(entry)

    status = inv.loader.imports(
        args.patterns,
        on_error=item_error_reporter(formatter),
        on_import=on_import,
    )
    if formatter.json_mode:
        formatter.json_output({"imported": [e.to_dict() for e in imported], "failures": status})
    return status
