"""
xsh update command.

SUMMARY: Fetch and fast-forward a loaded library, optionally switching branch
"""

from __future__ import annotations

import argparse

from xsh.cli import OutputFormatter, add_branch_flag, add_json_flag, add_library_arg, get_invocation
from xsh.core.libraries import LibraryRegistry

SUMMARY = "Fetch and fast-forward a loaded library, optionally switching branch"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_branch_flag(parser)
    add_library_arg(parser, "Library to update")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    lib = LibraryRegistry(get_invocation().xsh_home).update(args.library, branch=args.branch)
    formatter.success(
        {"library": lib.to_dict()},
        f"Updated {lib.name} ({lib.version or 'unknown'})",
    )
    return 0
