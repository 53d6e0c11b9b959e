"""xsh configuration system.

Usage:
    from xsh.core.config import ConfigManager
    from xsh.core.config.domains import LibrariesConfig

    # Direct config manager usage
    config = ConfigManager(xsh_home=Path("/home/me/.xsh")).load_config()

    # Domain-specific accessors (recommended)
    libs = LibrariesConfig(xsh_home=Path("/home/me/.xsh"))
    print(libs.default_library)
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config
from .domains import LibrariesConfig, LoggingConfig, TimeoutsConfig, UnitsConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "LibrariesConfig",
    "UnitsConfig",
    "TimeoutsConfig",
    "LoggingConfig",
]
