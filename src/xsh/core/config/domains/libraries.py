"""Domain-specific configuration for the library registry layout."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from xsh.core.paths import resolve_dev_home

from ..base import BaseDomainConfig


class LibrariesConfig(BaseDomainConfig):
    """Where libraries, dev links and script shims live."""

    def _config_section(self) -> str:
        return "libraries"

    @cached_property
    def default_library(self) -> str:
        return str(self.section.get("default", "x"))

    @cached_property
    def git_base_url(self) -> str:
        return str(self.section.get("git_base_url", "")).rstrip("/")

    @cached_property
    def lib_root(self) -> Path:
        return self.xsh_home / str(self.section.get("dir", "lib"))

    @cached_property
    def dev_root(self) -> Path:
        return resolve_dev_home(self.xsh_home, str(self.section.get("dev_dir", "lib-dev")))

    @cached_property
    def bin_root(self) -> Path:
        return self.xsh_home / str(self.section.get("bin_dir", "bin"))

    def default_repo_url(self, name: str) -> str:
        """Return ``<git_base_url>/<name>.git``."""
        return f"{self.git_base_url}/{name}.git"
