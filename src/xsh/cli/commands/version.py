"""
xsh version command.

SUMMARY: Show the xsh version
"""

from __future__ import annotations

import argparse

from xsh import __version__
from xsh.cli import OutputFormatter, add_json_flag

SUMMARY = "Show the xsh version"

# Works without XSH_HOME.
NEEDS_HOME = False


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    formatter.success({"version": __version__}, f"xsh {__version__}")
    return 0
