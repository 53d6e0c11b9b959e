"""
xsh dev command.

SUMMARY: Manage dev-override links to local library working copies
"""

from __future__ import annotations

import argparse
from pathlib import Path

from xsh.cli import OutputFormatter, add_json_flag, get_invocation
from xsh.core.libraries import LibraryRegistry

SUMMARY = "Manage dev-override links to local library working copies"


def register_args(parser: argparse.ArgumentParser) -> None:
    actions = parser.add_subparsers(dest="action", metavar="<action>")
    actions.required = True

    link = actions.add_parser("link", help="Link LIB to a working copy at PATH")
    link.add_argument("library", help="Library name")
    link.add_argument("path", help="Working copy directory")
    add_json_flag(link)

    unlink = actions.add_parser("unlink", help="Remove the dev link of LIB")
    unlink.add_argument("library", help="Library name")
    add_json_flag(unlink)

    show = actions.add_parser("list", help="List dev links")
    add_json_flag(show)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    registry = LibraryRegistry(get_invocation().xsh_home)

    if args.action == "link":
        link = registry.link_dev(args.library, Path(args.path))
        formatter.success(
            {"library": args.library, "link": str(link), "target": str(link.resolve())},
            f"Linked {args.library} -> {link.resolve()}",
        )
        return 0

    if args.action == "unlink":
        registry.unlink_dev(args.library)
        formatter.success({"library": args.library}, f"Unlinked {args.library}")
        return 0

    links = {name: str((registry.dev_root / name).resolve()) for name in registry.dev_names()}
    if formatter.json_mode:
        formatter.json_output({"links": links})
    else:
        for name, target in links.items():
            formatter.text(f"{name} -> {target}")
    return 0
