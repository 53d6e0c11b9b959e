"""Debug-trace and dev-override selectors.

A selector is read from ``XSH_DEBUG`` / ``XSH_DEV`` once per top-level
invocation. Its value is either the universal toggle ``1`` or an LPUR; a
unit is selected when its LPUE equals the LPUR, lives beneath it, or matches
it as a glob.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Mapping, Optional

from xsh.core.naming import DEFAULT_LIBRARY, complete

DEBUG_ENV = "XSH_DEBUG"
DEV_ENV = "XSH_DEV"

UNIVERSAL = "1"
_OFF = ("", "0")


def lpur_matches(lpur: str, lpue: str, default_library: str = DEFAULT_LIBRARY) -> bool:
    """True if ``lpue`` equals ``lpur``, lives beneath it, or matches it as a glob."""
    pattern = complete(lpur, default_library)
    base = pattern[:-2] if pattern.endswith("/*") else pattern
    candidate = complete(lpue, default_library)
    if candidate == base or candidate.startswith(base + "/"):
        return True
    return fnmatchcase(candidate, pattern)


@dataclass(frozen=True)
class Selector:
    value: Optional[str] = None
    default_library: str = DEFAULT_LIBRARY

    @classmethod
    def from_env(
        cls,
        name: str,
        environ: Optional[Mapping[str, str]] = None,
        *,
        default_library: str = DEFAULT_LIBRARY,
    ) -> "Selector":
        env = os.environ if environ is None else environ
        raw = (env.get(name) or "").strip()
        return cls(None if raw in _OFF else raw, default_library)

    @classmethod
    def universal(cls, default_library: str = DEFAULT_LIBRARY) -> "Selector":
        return cls(UNIVERSAL, default_library)

    @property
    def active(self) -> bool:
        return self.value is not None

    @property
    def is_universal(self) -> bool:
        return self.value == UNIVERSAL

    def matches(self, lpue: str) -> bool:
        if self.value is None:
            return False
        if self.is_universal:
            return True
        return lpur_matches(self.value, lpue, self.default_library)

    def __bool__(self) -> bool:
        return self.active


NO_SELECTOR = Selector()


__all__ = ["DEBUG_ENV", "DEV_ENV", "UNIVERSAL", "Selector", "NO_SELECTOR", "lpur_matches"]
