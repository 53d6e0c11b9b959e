"""Domain-specific configuration for the on-disk unit contract."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig


class UnitsConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "units"

    @cached_property
    def function_suffix(self) -> str:
        return str(self.section.get("function_suffix", ".py"))

    @cached_property
    def script_suffixes(self) -> Tuple[str, ...]:
        return tuple(str(s) for s in (self.section.get("script_suffixes") or []))

    @cached_property
    def doc_marker(self) -> str:
        return str(self.section.get("doc_marker", "#?"))

    @cached_property
    def init_file(self) -> str:
        return str(self.section.get("init_file", "__init__.py"))

    @cached_property
    def runtime_init_file(self) -> str:
        return str(self.section.get("runtime_init_file", "__runtime__.py"))
