"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. The cache key includes the registry root, a fingerprint of the
``XSH_*__*`` override variables and the mtimes of user config files, so tests
and long-running processes never see stale configuration.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}
_cache_clearers: Dict[str, Callable[[], None]] = {}


def _normalize_xsh_home(xsh_home: Optional[Path]) -> Path:
    if xsh_home is None:
        from xsh.core.paths import resolve_xsh_home

        return resolve_xsh_home()
    return Path(xsh_home).expanduser().resolve()


def _cache_key(xsh_home: Path) -> str:
    from xsh.core.config.manager import ENV_PREFIX, is_override_key
    from xsh.core.utils.io import iter_yaml_files

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX) and is_override_key(k)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(xsh_home / "config"):
        try:
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((p.name, 0, 0))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{xsh_home}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(xsh_home: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same inputs (treat as
    immutable).
    """
    normalized = _normalize_xsh_home(xsh_home)
    key = _cache_key(normalized)
    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(xsh_home=normalized)
        _config_cache[key] = manager.load_config(validate=validate)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the config dict cache and every registered dependent cache."""
    _config_cache.clear()
    for _name, clearer in list(_cache_clearers.items()):
        clearer()


def register_cache_clearer(name: str, clearer: Callable[[], None]) -> None:
    """Register an additional cache clearer to run inside `clear_all_caches()`."""
    _cache_clearers[name] = clearer


__all__ = [
    "get_cached_config",
    "clear_all_caches",
    "register_cache_clearer",
]
