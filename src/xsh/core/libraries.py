"""Library registry.

Libraries are git checkouts under ``<XSH_HOME>/lib/<name>``. Dev overrides are
symlinks under ``<XSH_DEV_HOME>/<name>`` pointing at local working copies.
"""
from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from xsh.core.config.domains import LibrariesConfig
from xsh.core.exceptions import (
    InvalidNameError,
    LibraryExistsError,
    LibraryNotFoundError,
    RepositoryError,
    XshError,
)
from xsh.core.naming import SCRIPTS
from xsh.core.utils import git

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass(frozen=True, slots=True)
class Library:
    """A loaded library.

    Attributes:
        name: Short name, unique among loaded libraries
        root: Checkout directory
        url: Remote repository URL (None if unknown)
        version: ``git describe --tags --always`` output (None if unknown)
        dev_root: Dev-override working copy, when linked
    """

    name: str
    root: Path
    url: Optional[str] = None
    version: Optional[str] = None
    dev_root: Optional[Path] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "root": str(self.root),
            "url": self.url,
            "version": self.version,
            "dev_root": str(self.dev_root) if self.dev_root else None,
        }


def _validate_name(name: str) -> str:
    name = (name or "").strip()
    if not name or "/" in name or name.startswith(".") or name.startswith("__"):
        raise InvalidNameError(f"Invalid library name: {name!r}", context={"library": name})
    return name


def mark_scripts_executable(root: Path) -> int:
    """Add execute bits to every file under ``<root>/scripts``.

    Returns:
        Number of files touched.
    """
    scripts = root / SCRIPTS
    if not scripts.is_dir():
        return 0
    count = 0
    for p in scripts.rglob("*"):
        if p.is_file() and not p.is_symlink():
            mode = p.stat().st_mode
            if mode & _EXEC_BITS != _EXEC_BITS:
                p.chmod(mode | _EXEC_BITS)
            count += 1
    return count


class LibraryRegistry:
    """Load, unload, update and list libraries under ``XSH_HOME``."""

    def __init__(self, xsh_home: Optional[Path] = None) -> None:
        self.config = LibrariesConfig(xsh_home=xsh_home)
        self.xsh_home = self.config.xsh_home
        self.lib_root = self.config.lib_root
        self.dev_root = self.config.dev_root

    def path_of(self, name: str) -> Path:
        return self.lib_root / _validate_name(name)

    def exists(self, name: str) -> bool:
        p = self.path_of(name)
        return p.exists() or p.is_symlink()

    def load(self, name: str, repo_url: Optional[str] = None, branch: Optional[str] = None) -> Library:
        """Clone a library into the registry.

        The clone lands in a hidden temporary sibling first and is renamed
        into place, so a failed or concurrent clone never leaves a partial
        ``lib/<name>``.

        Raises:
            LibraryExistsError: ``lib/<name>`` already exists.
            RepositoryError: git failed; message is git's stderr.
        """
        target = self.path_of(name)
        if target.exists() or target.is_symlink():
            raise LibraryExistsError(
                f"Library already exists: {name}",
                context={"library": name, "path": str(target)},
            )

        url = repo_url or self.config.default_repo_url(name)
        self.lib_root.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{name}.", dir=self.lib_root))
        logger.debug("Cloning %s into %s (branch=%s)", url, staging, branch)
        try:
            git.clone(url, staging, branch=branch, xsh_home=self.xsh_home)
            mark_scripts_executable(staging)
            if target.exists() or target.is_symlink():
                raise LibraryExistsError(
                    f"Library already exists: {name}",
                    context={"library": name, "path": str(target)},
                )
            try:
                os.rename(staging, target)
            except OSError as exc:
                raise LibraryExistsError(
                    f"Library already exists: {name}",
                    context={"library": name, "path": str(target)},
                ) from exc
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        logger.info("Loaded library %s from %s", name, url)
        return self.get(name)

    def unload(self, name: str) -> None:
        """Remove a library checkout.

        Raises:
            LibraryNotFoundError: The library is not loaded.
        """
        target = self.path_of(name)
        if target.is_symlink():
            target.unlink()
        elif target.is_dir():
            shutil.rmtree(target)
        else:
            raise LibraryNotFoundError(
                f"Library not found: {name}",
                context={"library": name, "path": str(target)},
            )
        logger.info("Unloaded library %s", name)

    def update(self, name: str, branch: Optional[str] = None) -> Library:
        """Fetch and fast-forward a library, or switch it to ``branch``."""
        target = self.path_of(name)
        if not target.is_dir():
            raise LibraryNotFoundError(f"Library not found: {name}", context={"library": name})

        git.fetch(target, xsh_home=self.xsh_home)
        if branch:
            git.checkout(target, branch, xsh_home=self.xsh_home)
        current = git.current_branch(target, xsh_home=self.xsh_home)
        if current:
            git.fast_forward(target, current, xsh_home=self.xsh_home)
        mark_scripts_executable(target)
        logger.info("Updated library %s (branch=%s)", name, current or "detached")
        return self.get(name)

    def get(self, name: str) -> Library:
        target = self.path_of(name)
        if not target.is_dir():
            raise LibraryNotFoundError(f"Library not found: {name}", context={"library": name})
        return Library(
            name=name,
            root=target,
            url=self._git_info(git.remote_url, target),
            version=self._git_info(git.describe, target),
            dev_root=self.dev_link_of(name),
        )

    def _git_info(self, fn, repo: Path) -> Optional[str]:
        if not (repo / ".git").exists():
            return None
        try:
            return fn(repo, xsh_home=self.xsh_home) or None
        except RepositoryError as exc:
            logger.debug("git query failed in %s: %s", repo, exc)
            return None

    def names(self) -> List[str]:
        """Return loaded library names, sorted."""
        if not self.lib_root.is_dir():
            return []
        return sorted(
            p.name for p in self.lib_root.iterdir()
            if p.is_dir() and not p.name.startswith(".")
        )

    def libraries(self) -> List[Library]:
        return [self.get(n) for n in self.names()]

    # ----- dev overrides -----

    def dev_names(self) -> List[str]:
        if not self.dev_root.is_dir():
            return []
        return sorted(
            p.name for p in self.dev_root.iterdir()
            if p.is_dir() and not p.name.startswith(".")
        )

    def dev_link_of(self, name: str) -> Optional[Path]:
        link = self.dev_root / name
        return link if link.is_dir() else None

    def link_dev(self, name: str, path: Path) -> Path:
        """Point ``<XSH_DEV_HOME>/<name>`` at a local working copy."""
        name = _validate_name(name)
        source = Path(path).expanduser().resolve()
        if not source.is_dir():
            raise LibraryNotFoundError(
                f"Not a directory: {source}",
                context={"library": name, "path": str(source)},
            )
        link = self.dev_root / name
        if link.exists() or link.is_symlink():
            raise LibraryExistsError(
                f"Dev link already exists: {link}",
                context={"library": name, "path": str(link)},
            )
        self.dev_root.mkdir(parents=True, exist_ok=True)
        link.symlink_to(source, target_is_directory=True)
        logger.info("Linked dev library %s -> %s", name, source)
        return link

    def unlink_dev(self, name: str) -> None:
        name = _validate_name(name)
        link = self.dev_root / name
        if not link.is_symlink():
            if link.exists():
                raise XshError(
                    f"Not a dev link, refusing to remove: {link}",
                    context={"library": name, "path": str(link)},
                )
            raise LibraryNotFoundError(
                f"Dev link not found: {name}",
                context={"library": name, "path": str(link)},
            )
        link.unlink()
        logger.info("Unlinked dev library %s", name)


__all__ = ["Library", "LibraryRegistry", "mark_scripts_executable"]
