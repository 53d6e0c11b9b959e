"""Domain-specific configuration accessors."""
from .libraries import LibrariesConfig
from .logging import LoggingConfig
from .timeouts import TimeoutsConfig
from .units import UnitsConfig

__all__ = ["LibrariesConfig", "LoggingConfig", "TimeoutsConfig", "UnitsConfig"]
