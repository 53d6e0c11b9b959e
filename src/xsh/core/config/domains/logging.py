"""Domain-specific configuration for xsh logging."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "INFO")).upper()

    @cached_property
    def log_path(self) -> Optional[Path]:
        raw = self.section.get("file")
        if not raw:
            return None
        p = Path(str(raw)).expanduser()
        return p if p.is_absolute() else self.xsh_home / p
