"""Load Python source files as modules without registering them in ``sys.modules``."""
from __future__ import annotations

import importlib.util
import logging
import re
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^0-9A-Za-z_.]")


def module_name_for(namespace: str, key: str) -> str:
    """Return a dotted module name safe for ``spec_from_file_location``."""
    return f"{namespace}.{_UNSAFE.sub('_', key.replace('/', '.'))}"


def load_module_from_path(
    path: Path,
    namespace: str = "xsh.dynamic",
    *,
    name: Optional[str] = None,
    seed: Optional[Mapping[str, Any]] = None,
) -> ModuleType:
    """Execute ``path`` as a fresh module.

    Args:
        path: Path to the .py file
        namespace: Module namespace prefix for the loaded module
        name: Module name suffix (defaults to the file stem)
        seed: Globals placed in the module before its body runs

    Returns:
        The executed module. Errors raised by the module body propagate.
    """
    module_name = module_name_for(namespace, name or path.stem)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {path}")
    module = importlib.util.module_from_spec(spec)
    if seed:
        module.__dict__.update(seed)
    logger.debug("Executing %s as %s", path, module_name)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    return module


def public_names(module: ModuleType, exclude_prefixes: tuple[str, ...] = ("_",)) -> Dict[str, Any]:
    """Return the module's public globals (names not starting with ``_``)."""
    return {k: v for k, v in vars(module).items() if not k.startswith(exclude_prefixes)}


__all__ = ["load_module_from_path", "module_name_for", "public_names"]
