"""
Auto-discovery CLI dispatcher for xsh.

Scans ``xsh/cli/commands/`` for command modules and registers them.
Adding a new command = adding a .py file exposing ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.

Any first token that is not a command is an LPUE: ``xsh x/string/upper hi``
calls the unit directly with the remaining arguments, untouched.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from xsh.cli._aliases import command_cli_names, resolve_canonical_command
from xsh.cli._output import OutputFormatter

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """
    Discover all command modules.

    Returns:
        Dict mapping canonical command name to command info dict
    """
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"xsh.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
            "needs_home": getattr(module, "NEEDS_HOME", True),
        }

    return commands


def _get_version() -> str:
    from xsh import __version__

    return __version__


def _usage() -> str:
    from xsh.core.docs import usage

    return usage()


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with every discovered command.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="xsh",
        description="xsh - namespaced loading and invocation of reusable utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )
    for cmd_name, cmd_info in sorted(discover_commands().items()):
        _add_command_parser(subparsers, cmd_name, cmd_info)
    return parser


def _add_command_parser(subparsers: Any, cmd_name: str, cmd_info: dict[str, Any]) -> argparse.ArgumentParser:
    primary, aliases = command_cli_names(cmd_name)
    cmd_parser = subparsers.add_parser(
        primary,
        aliases=aliases,
        help=cmd_info["summary"],
        description=cmd_info["summary"],
    )
    if cmd_info["register_args"]:
        cmd_info["register_args"](cmd_parser)
    if cmd_info["main"]:
        cmd_parser.set_defaults(_func=cmd_info["main"], _needs_home=cmd_info["needs_home"])
    return cmd_parser


def _build_fast_parser(cmd_name: str) -> argparse.ArgumentParser:
    """Build an argparse parser for only the resolved command (fast path)."""
    parser = argparse.ArgumentParser(
        prog="xsh",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command")
    _add_command_parser(subparsers, cmd_name, discover_commands()[cmd_name])
    return parser


def _configure_logging(xsh_home: Path) -> None:
    from xsh.core.config.domains import LoggingConfig
    from xsh.core.log import configure_logging

    cfg = LoggingConfig(xsh_home=xsh_home)
    configure_logging(log_path=cfg.log_path, level=cfg.level)


def _run_in_invocation(
    work: Callable[[Any], int],
    formatter: OutputFormatter,
) -> int:
    """Run ``work(invocation)`` inside the (possibly shared) invocation scope."""
    from xsh.core.exceptions import XshError
    from xsh.core.invocation import current_invocation, invocation

    outermost = current_invocation() is None
    try:
        with invocation() as inv:
            if outermost:
                _configure_logging(inv.xsh_home)
            return work(inv)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except XshError as e:
        logger.debug("Command failed: %s", e)
        formatter.error(e)
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        formatter.error(e)
        return 1


def _direct_call(argv: list[str]) -> int:
    from xsh.core.invocation import direct_call

    lpue, args = argv[0], argv[1:]
    return _run_in_invocation(lambda inv: direct_call(inv, lpue, args), OutputFormatter())


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the xsh CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = [str(a) for a in argv]

    if not argv or not argv[0].strip():
        print(_usage(), file=sys.stderr)
        return 1
    if argv[0] in HELP_FLAGS:
        print(_usage())
        return 0
    if argv[0] == "--version":
        argv = ["version", *argv[1:]]

    cmd_name = resolve_canonical_command(argv[0], canonical_commands=tuple(discover_commands().keys()))
    if cmd_name is None:
        if argv[0].startswith("-"):
            print(f"Error: unknown option: {argv[0]}", file=sys.stderr)
            print(_usage(), file=sys.stderr)
            return 1
        return _direct_call(argv)

    parser = _build_fast_parser(cmd_name)
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits on -h and on usage errors; never end a nested caller's process.
        return e.code if isinstance(e.code, int) else (0 if e.code is None else 2)

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        parser.print_help(file=sys.stderr)
        return 1

    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))
    if not getattr(args, "_needs_home", True):
        return func(args)
    return _run_in_invocation(lambda _inv: func(args), formatter)


if __name__ == "__main__":
    sys.exit(main())
