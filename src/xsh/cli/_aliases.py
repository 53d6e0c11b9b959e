"""Central registry for xsh command aliases.

Commands are discovered from module names under ``xsh/cli/commands/``. The
singular spellings of the batch commands are accepted as aliases. Matching is
case-sensitive.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterable, List, Tuple


# Canonical command (module) -> extra CLI aliases.
COMMAND_ALIASES: Dict[str, List[str]] = {
    "imports": ["import"],
    "unimports": ["unimport"],
    "calls": ["call"],
}


def command_cli_names(canonical: str) -> Tuple[str, List[str]]:
    """Return (primary, aliases) for an on-disk canonical command name."""
    primary = canonical.replace("_", "-")
    aliases: List[str] = []
    if primary != canonical:
        aliases.append(canonical)
    aliases.extend(COMMAND_ALIASES.get(canonical, []))

    seen: set[str] = set()
    out: List[str] = []
    for a in aliases:
        if not a or a == primary or a in seen:
            continue
        seen.add(a)
        out.append(a)
    return primary, out


@lru_cache(maxsize=32)
def build_command_alias_index(canonical_commands: Tuple[str, ...]) -> Dict[str, str]:
    """Build a lookup map of {cli_token -> canonical_command}."""
    index: Dict[str, str] = {}
    for canonical in canonical_commands:
        primary, aliases = command_cli_names(canonical)
        index[canonical] = canonical
        index[primary] = canonical
        for a in aliases:
            index[a] = canonical
    return index


def resolve_canonical_command(
    token: str,
    *,
    canonical_commands: Iterable[str],
) -> str | None:
    """Resolve a CLI token to a canonical command module name (None if it is not a command)."""
    commands_tuple = tuple(sorted(set(str(c) for c in canonical_commands if c)))
    index = build_command_alias_index(commands_tuple)
    return index.get(token)


__all__ = [
    "COMMAND_ALIASES",
    "command_cli_names",
    "build_command_alias_index",
    "resolve_canonical_command",
]
