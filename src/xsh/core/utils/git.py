"""Thin git helpers used by the library registry.

Every failure is surfaced as :class:`RepositoryError` whose message is git's
own diagnostic output, unmodified.
"""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from xsh.core.exceptions import RepositoryError
from xsh.core.utils.subprocess import run_git_command


def _git(args: List[str], *, cwd: Optional[Path] = None, xsh_home: Optional[Path] = None) -> str:
    argv = ["git", *args]
    try:
        result = run_git_command(argv, cwd=cwd, xsh_home=xsh_home)
    except subprocess.TimeoutExpired as exc:
        raise RepositoryError(f"git timed out after {exc.timeout}s", argv=argv) from exc
    except OSError as exc:
        raise RepositoryError(str(exc), argv=argv) from exc
    if result.returncode != 0:
        message = (result.stderr or result.stdout or "").rstrip("\n")
        raise RepositoryError(
            message or f"git exited with status {result.returncode}",
            returncode=result.returncode,
            argv=argv,
        )
    return (result.stdout or "").strip()


def clone(url: str, dest: Path, *, branch: Optional[str] = None, xsh_home: Optional[Path] = None) -> None:
    """Clone ``url`` into ``dest`` (optionally at ``branch`` or tag)."""
    args = ["clone", "--quiet"]
    if branch:
        args += ["--branch", branch]
    args += [url, str(dest)]
    _git(args, xsh_home=xsh_home)


def fetch(repo: Path, *, xsh_home: Optional[Path] = None) -> None:
    _git(["fetch", "--quiet", "--tags", "origin"], cwd=repo, xsh_home=xsh_home)


def checkout(repo: Path, ref: str, *, xsh_home: Optional[Path] = None) -> None:
    _git(["checkout", "--quiet", ref], cwd=repo, xsh_home=xsh_home)


def current_branch(repo: Path, *, xsh_home: Optional[Path] = None) -> Optional[str]:
    """Return the checked-out branch, or None on a detached HEAD."""
    name = _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo, xsh_home=xsh_home)
    return None if name == "HEAD" else name


def fast_forward(repo: Path, branch: str, *, xsh_home: Optional[Path] = None) -> None:
    _git(["merge", "--quiet", "--ff-only", f"origin/{branch}"], cwd=repo, xsh_home=xsh_home)


def describe(repo: Path, *, xsh_home: Optional[Path] = None) -> str:
    """Return the nearest tag (or abbreviated commit when untagged)."""
    return _git(["describe", "--tags", "--always"], cwd=repo, xsh_home=xsh_home)


def remote_url(repo: Path, *, xsh_home: Optional[Path] = None) -> str:
    return _git(["config", "--get", "remote.origin.url"], cwd=repo, xsh_home=xsh_home)


__all__ = [
    "clone",
    "fetch",
    "checkout",
    "current_branch",
    "fast_forward",
    "describe",
    "remote_url",
]
