"""Domain-specific configuration for operation timeouts."""
from __future__ import annotations

from functools import cached_property
from typing import Optional

from ..base import BaseDomainConfig


class TimeoutsConfig(BaseDomainConfig):
    """Timeouts for blocking subprocesses. ``None`` waits forever."""

    def _config_section(self) -> str:
        return "timeouts"

    @cached_property
    def git_operations_seconds(self) -> Optional[float]:
        raw = self.section.get("git_operations_seconds")
        return None if raw is None else float(raw)
