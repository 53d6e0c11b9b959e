"""Registry root resolution.

``XSH_HOME`` locates the library registry and is required. Everything else
(library checkouts, dev links, script shims, user config) lives beneath it
unless configured otherwise.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from xsh.core.exceptions import EnvironmentMisconfiguredError

HOME_ENV = "XSH_HOME"
DEV_HOME_ENV = "XSH_DEV_HOME"


def resolve_xsh_home(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the registry root from ``XSH_HOME``.

    Raises:
        EnvironmentMisconfiguredError: If the variable is unset, empty, or does
            not point at an existing directory.
    """
    env = os.environ if environ is None else environ
    raw = (env.get(HOME_ENV) or "").strip()
    if not raw:
        raise EnvironmentMisconfiguredError(
            f"{HOME_ENV} is not set",
            context={"variable": HOME_ENV},
        )
    home = Path(raw).expanduser()
    if not home.is_dir():
        raise EnvironmentMisconfiguredError(
            f"{HOME_ENV} does not exist or is not a directory: {home}",
            context={"variable": HOME_ENV, "path": str(home)},
        )
    return home.resolve()


def resolve_dev_home(
    xsh_home: Path,
    dev_dir: str,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Return the dev-override root: ``XSH_DEV_HOME`` or ``<XSH_HOME>/<dev_dir>``."""
    env = os.environ if environ is None else environ
    raw = (env.get(DEV_HOME_ENV) or "").strip()
    if raw:
        return Path(raw).expanduser().resolve()
    return xsh_home / dev_dir


__all__ = ["HOME_ENV", "DEV_HOME_ENV", "resolve_xsh_home", "resolve_dev_home"]
