"""
xsh unload command.

SUMMARY: Remove a library from the registry
"""

from __future__ import annotations

import argparse

from xsh.cli import OutputFormatter, add_json_flag, add_library_arg, get_invocation
from xsh.core.libraries import LibraryRegistry

SUMMARY = "Remove a library from the registry"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_library_arg(parser, "Library to remove")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    LibraryRegistry(get_invocation().xsh_home).unload(args.library)
    formatter.success({"library": args.library}, f"Unloaded {args.library}")
    return 0
