"""
xsh load command.

SUMMARY: Clone a library into the registry
"""

from __future__ import annotations

import argparse

from xsh.cli import OutputFormatter, add_branch_flag, add_json_flag, add_library_arg, get_invocation
from xsh.core.libraries import LibraryRegistry

SUMMARY = "Clone a library into the registry"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r",
        "--repo",
        dest="repo_url",
        default=None,
        help="Repository URL (default: <libraries.git_base_url>/<LIB>.git)",
    )
    add_branch_flag(parser)
    add_library_arg(parser, "Name to load the library under")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    registry = LibraryRegistry(get_invocation().xsh_home)
    lib = registry.load(args.library, repo_url=args.repo_url, branch=args.branch)
    formatter.success(
        {"library": lib.to_dict()},
        f"Loaded {lib.name} ({lib.version or 'unknown'})",
    )
    return 0
