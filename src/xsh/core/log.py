from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_CONFIGURED_LOG_PATH: str | None = None
_XSH_FILE_HANDLER: logging.Handler | None = None
_NULL_HANDLER_INSTALLED: bool = False

_LOGGER_NAME = "xsh"


def _level_from_name(name: str) -> int:
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(*, log_path: Optional[Path], level: str = "INFO") -> None:
    """Configure the ``xsh`` logger.

    With a ``log_path``, records go to that file. Without one, a NullHandler is
    installed so the stdlib ``lastResort`` handler never writes to stderr; unit
    output on stdout/stderr stays untouched either way.

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _XSH_FILE_HANDLER, _NULL_HANDLER_INSTALLED

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_level_from_name(level))

    if log_path is None:
        if not _NULL_HANDLER_INSTALLED:
            logger.addHandler(logging.NullHandler())
            _NULL_HANDLER_INSTALLED = True
        return

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _XSH_FILE_HANDLER is not None:
        return

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)

    # Never log to the terminal streams units write to.
    for h in list(logger.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) in (sys.stdout, sys.stderr):
            logger.removeHandler(h)
            h.close()

    if _XSH_FILE_HANDLER is not None:
        logger.removeHandler(_XSH_FILE_HANDLER)
        _XSH_FILE_HANDLER.close()
        _XSH_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(fh)

    _XSH_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_logging_for_tests() -> None:
    """Test-only: clear configured handlers."""
    global _CONFIGURED_LOG_PATH, _XSH_FILE_HANDLER, _NULL_HANDLER_INSTALLED
    logger = logging.getLogger(_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    _CONFIGURED_LOG_PATH = None
    _XSH_FILE_HANDLER = None
    _NULL_HANDLER_INSTALLED = False


__all__ = ["configure_logging", "reset_logging_for_tests"]
