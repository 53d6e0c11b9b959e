"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_library_arg(parser: argparse.ArgumentParser, help_text: str = "Library name (e.g., x)") -> None:
    parser.add_argument("library", help=help_text)


def add_branch_flag(parser: argparse.ArgumentParser) -> None:
    """Add -b/--branch for commands that check out a branch or tag."""
    parser.add_argument(
        "-b",
        "--branch",
        default=None,
        help="Branch or tag to check out",
    )


def add_patterns_arg(
    parser: argparse.ArgumentParser,
    *,
    metavar: str = "LPUE|LPUR",
    help_text: str = "Unit expressions or patterns (e.g., x/string/upper, /string/)",
) -> None:
    parser.add_argument("patterns", nargs="+", metavar=metavar, help=help_text)


__all__ = [
    "add_json_flag",
    "add_library_arg",
    "add_branch_flag",
    "add_patterns_arg",
]
