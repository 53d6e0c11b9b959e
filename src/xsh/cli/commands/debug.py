"""
xsh debug command.

SUMMARY: Run an xsh command with tracing on for every unit
"""

from __future__ import annotations

import argparse

from xsh.cli import get_invocation
from xsh.core.selectors import Selector

SUMMARY = "Run an xsh command with tracing on for every unit"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "argv",
        nargs=argparse.REMAINDER,
        help="Command to run, e.g. `xsh debug x/string/upper hello`",
    )


def main(args: argparse.Namespace) -> int:
    from xsh.cli._dispatcher import main as dispatch

    argv = list(args.argv or [])
    if argv and argv[0] == "--":
        argv = argv[1:]

    inv = get_invocation()
    previous = inv.debug
    inv.debug = Selector.universal(inv.default_library)
    inv.loader.debug = inv.debug
    try:
        return dispatch(argv)
    finally:
        inv.debug = previous
        if inv.loader is not None:
            inv.loader.debug = previous
