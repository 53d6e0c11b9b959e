"""
xsh calls command.

SUMMARY: Call each unit in order without arguments; keep going on failure
"""

from __future__ import annotations

import argparse

from xsh.cli import OutputFormatter, get_invocation
from xsh.core.exceptions import XshError
from xsh.core.invocation import direct_call

SUMMARY = "Call each unit in order without arguments; keep going on failure"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("lpues", nargs="+", metavar="LPUE", help="Units to call")


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()
    inv = get_invocation()
    failures = 0
    for lpue in args.lpues:
        try:
            rc = direct_call(inv, lpue, [])
        except XshError as e:
            formatter.error(e)
            rc = 1
        except Exception as e:
            formatter.error(e, f"{lpue}: {type(e).__name__}: {e}")
            rc = 1
        if rc != 0:
            failures += 1
    return failures
