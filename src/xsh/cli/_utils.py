"""Shared helpers for CLI command modules."""
from __future__ import annotations

from typing import Callable

from xsh.core.exceptions import XshError
from xsh.core.invocation import Invocation, current_invocation

from ._output import OutputFormatter


def get_invocation() -> Invocation:
    """Return the invocation the dispatcher opened for this command."""
    inv = current_invocation()
    if inv is None or not inv.active:
        raise XshError("No active xsh invocation")
    return inv


def item_error_reporter(formatter: OutputFormatter) -> Callable[[str, BaseException], None]:
    """Return an ``on_error`` callback for batch operations."""

    def report(item: str, exc: BaseException) -> None:
        if isinstance(exc, XshError):
            formatter.error(exc)
        else:
            formatter.error(exc, f"{item}: {type(exc).__name__}: {exc}")

    return report


__all__ = ["get_invocation", "item_error_reporter"]
