"""
xsh CLI package.

Provides the command-line interface with auto-discovery of commands
from ``xsh/cli/commands/``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import add_branch_flag, add_json_flag, add_library_arg, add_patterns_arg
from ._utils import get_invocation, item_error_reporter

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "add_json_flag",
    "add_library_arg",
    "add_branch_flag",
    "add_patterns_arg",
    # Utilities
    "get_invocation",
    "item_error_reporter",
]
