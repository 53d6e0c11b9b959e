"""
xsh configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from xsh.core.exceptions import ConfigError
from xsh.core.utils.io import iter_yaml_files, read_yaml
from xsh.core.utils.merge import deep_merge
from xsh.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "XSH_"


def is_override_key(name: str) -> bool:
    """Return True for ``XSH_<section>__<key>`` style variables.

    Plain variables such as ``XSH_HOME`` or ``XSH_DEBUG`` are inputs, not
    config overrides.
    """
    return name.startswith(ENV_PREFIX) and "__" in name[len(ENV_PREFIX):]


class ConfigManager:
    """Load, merge, and validate xsh configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: XSH_<section>__<key>
    2. User config: <XSH_HOME>/config/*.yaml (alphabetical order)
    3. Bundled defaults: xsh.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, xsh_home: Optional[Path] = None) -> None:
        if xsh_home is None:
            from xsh.core.paths import resolve_xsh_home

            xsh_home = resolve_xsh_home()
        self.xsh_home = Path(xsh_home)
        self.core_config_dir = get_data_path("config")
        self.user_config_dir = self.xsh_home / "config"
        self.schema_path = get_data_path("schemas", "config.schema.yaml")

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            try:
                data = read_yaml(path, default={}, raise_on_error=True) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
            if not isinstance(data, dict):
                raise ConfigError(
                    f"Config file must contain a mapping: {path}",
                    context={"path": str(path)},
                )
            cfg = deep_merge(cfg, data)
        return cfg

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not is_override_key(key):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = [s.lower() for s in raw.split("__")]
            if any(not s for s in segs):
                logger.warning("Ignoring malformed override variable: %s", key)
                continue
            try:
                value = yaml.safe_load(os.environ[key])
            except yaml.YAMLError:
                value = os.environ[key]
            yield segs, value, key

    @staticmethod
    def _set_nested(root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path, value, key in self._iter_env_overrides():
            logger.debug("Config override from %s", key)
            self._set_nested(cfg, path, value)
        return cfg

    def validate(self, cfg: Dict[str, Any]) -> None:
        """Validate ``cfg`` against the bundled JSON schema.

        Raises:
            ConfigError: With every schema violation listed.
        """
        schema = read_yaml(self.schema_path, default={}, raise_on_error=True)
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.path))
        if errors:
            details = [
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}"
                for err in errors
            ]
            raise ConfigError(
                "Invalid xsh configuration: " + "; ".join(details),
                context={"errors": details},
            )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration (defaults → user → env)."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        cfg = self.apply_env_overrides(cfg)
        if validate:
            self.validate(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX", "is_override_key"]
