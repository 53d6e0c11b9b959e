from __future__ import annotations

import pytest

from xsh.cli._aliases import build_command_alias_index, command_cli_names, resolve_canonical_command

pytestmark = pytest.mark.fast

COMMANDS = ("calls", "debug", "dev", "help", "imports", "list", "load", "unimports", "unload", "update", "version")


def test_batch_commands_accept_singular_alias() -> None:
    assert command_cli_names("imports") == ("imports", ["import"])
    assert command_cli_names("unimports") == ("unimports", ["unimport"])
    assert command_cli_names("calls") == ("calls", ["call"])
    assert command_cli_names("list") == ("list", [])


@pytest.mark.parametrize(
    "token, expected",
    [
        ("import", "imports"),
        ("imports", "imports"),
        ("unimport", "unimports"),
        ("call", "calls"),
        ("list", "list"),
        ("x/string/upper", None),
        ("Import", None),
        ("--json", None),
    ],
)
def test_resolve_canonical_command(token: str, expected: str | None) -> None:
    assert resolve_canonical_command(token, canonical_commands=COMMANDS) == expected


def test_alias_index_covers_every_command() -> None:
    index = build_command_alias_index(COMMANDS)
    assert set(COMMANDS) <= set(index)
    assert index["call"] == "calls"
