from __future__ import annotations

from typing import Any, Dict, Mapping


class XshError(Exception):
    """Base exception for the xsh framework."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class EnvironmentMisconfiguredError(XshError, RuntimeError):
    """Raised when the registry root is unset or missing."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class InvalidNameError(XshError, ValueError):
    """Raised for an empty or malformed LPUE/LPUR."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnitNotFoundError(XshError, LookupError):
    """Raised when an LPUE/LPUR resolves to nothing or an LPUC is not defined."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class AmbiguousUnitError(XshError, LookupError):
    """Raised when a single-unit operation matches more than one unit."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class UnitDefinitionError(XshError, ValueError):
    """Raised when a function unit does not declare its routine as required."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class LibraryNotFoundError(XshError, FileNotFoundError):
    """Raised when a library is not loaded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class LibraryExistsError(XshError, FileExistsError):
    """Raised when loading a library whose name is already taken."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        FileExistsError.__init__(self, message)


class RepositoryError(XshError):
    """Raised when git fails; the message is git's own diagnostic output."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        argv: list[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if returncode is not None:
            ctx["returncode"] = returncode
        if argv:
            ctx["argv"] = list(argv)
        super().__init__(message, context=ctx)


class ConfigError(XshError, ValueError):
    """Raised when the merged configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        XshError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "XshError",
    "EnvironmentMisconfiguredError",
    "InvalidNameError",
    "UnitNotFoundError",
    "AmbiguousUnitError",
    "UnitDefinitionError",
    "LibraryNotFoundError",
    "LibraryExistsError",
    "RepositoryError",
    "ConfigError",
]
