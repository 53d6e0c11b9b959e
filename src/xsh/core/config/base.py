"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- Centralized caching via cache.py
- Consistent XSH_HOME handling
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")

        cfg = MyConfig(xsh_home=Path("/home/me/.xsh"))
        print(cfg.my_setting)
    """

    def __init__(self, xsh_home: Optional[Path] = None) -> None:
        """Initialize domain config.

        Args:
            xsh_home: Registry root. Resolved from ``XSH_HOME`` if None.
        """
        self._xsh_home = xsh_home
        self._config = get_cached_config(xsh_home=xsh_home)

    @property
    def xsh_home(self) -> Path:
        """Return the explicit registry root, or resolve it from the environment."""
        if self._xsh_home:
            return self._xsh_home

        from xsh.core.paths import resolve_xsh_home
        return resolve_xsh_home()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section (empty dict if absent)."""
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
