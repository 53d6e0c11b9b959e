"""Subprocess helpers with config-driven timeouts.

- No shell=True (security)
- Git commands pick up ``timeouts.git_operations_seconds``
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, MutableMapping, Optional, Sequence

logger = logging.getLogger(__name__)


def _flatten_cmd(cmd: Any) -> Sequence[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def _to_cwd(cwd: Optional[Path | str]) -> Optional[str]:
    """Convert Path or str cwd to str for subprocess."""
    if cwd is None:
        return None
    return str(cwd)


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    env: Optional[MutableMapping[str, str]] = None,
    timeout: Optional[float] = None,
    capture_output: bool = False,
    text: bool = True,
    check: bool = False,
    input: Any = None,
) -> subprocess.CompletedProcess:
    """
    Thin wrapper around subprocess.run with safe defaults.

    Args:
        cmd: Command sequence to execute
        cwd: Working directory (Path or str)
        env: Environment variables
        timeout: Timeout in seconds (None waits forever)
        capture_output: Capture stdout/stderr
        text: Return output as text instead of bytes
        check: Raise CalledProcessError on non-zero exit

    Returns:
        CompletedProcess from subprocess.run
    """
    argv = list(_flatten_cmd(cmd))
    logger.debug("run: %s (cwd=%s)", " ".join(shlex.quote(a) for a in argv), cwd)
    return subprocess.run(
        argv,
        cwd=_to_cwd(cwd),
        env=env,
        timeout=timeout,
        capture_output=capture_output,
        text=text,
        check=check,
        input=input,
    )


def run_git_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    env: Optional[MutableMapping[str, str]] = None,
    timeout: Optional[float] = None,
    capture_output: bool = True,
    text: bool = True,
    check: bool = False,
    xsh_home: Optional[Path] = None,
) -> subprocess.CompletedProcess:
    """
    Run a git command using the configured git timeout.

    Args:
        cmd: Git command sequence to execute (starting with "git")
        cwd: Working directory (Path or str)
        env: Environment variables
        timeout: Timeout in seconds (defaults to timeouts.git_operations_seconds)
        capture_output: Capture stdout/stderr
        text: Return output as text instead of bytes
        check: Raise CalledProcessError on non-zero exit
        xsh_home: Registry root used to look up the timeout

    Returns:
        CompletedProcess from subprocess.run
    """
    if timeout is None:
        from xsh.core.config.domains import TimeoutsConfig

        timeout = TimeoutsConfig(xsh_home=xsh_home).git_operations_seconds

    return run_command(
        cmd,
        cwd=cwd,
        env=env,
        timeout=timeout,
        capture_output=capture_output,
        text=text,
        check=check,
    )


__all__ = ["run_command", "run_git_command"]
