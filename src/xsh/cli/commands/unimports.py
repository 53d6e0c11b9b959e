"""
xsh unimports command.

SUMMARY: Remove imported callables (LPUC) from the process
"""

from __future__ import annotations

import argparse

from xsh.cli import OutputFormatter, add_json_flag, add_patterns_arg, get_invocation, item_error_reporter

SUMMARY = "Remove imported callables (LPUC) from the process"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_patterns_arg(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    inv = get_invocation()
    before = set(inv.table.names())
    status = inv.loader.unimports(args.patterns, on_error=item_error_reporter(formatter))
    if formatter.json_mode:
        removed = sorted(before - set(inv.table.names()))
        formatter.json_output({"unimported": removed, "failures": status})
    return status
