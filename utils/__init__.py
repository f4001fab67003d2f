"""Utilities package for netswitch.

Provides system command execution, input validation, text normalization
and display formatting.
"""

from .formatters import format_flags, format_link, shorten_text
from .system import (
    command_exists,
    load_json_rows,
    run_command,
    run_powershell,
    sanitize_for_log,
)
from .text import name_key, names_equal, normalize_for_match
from .validators import (
    is_valid_ipv4,
    optional_bool,
    optional_int,
    optional_str,
    validate_adapter_name,
)

__all__ = [
    # System
    "run_command",
    "run_powershell",
    "load_json_rows",
    "command_exists",
    "sanitize_for_log",
    # Text
    "normalize_for_match",
    "name_key",
    "names_equal",
    # Validators
    "validate_adapter_name",
    "is_valid_ipv4",
    "optional_str",
    "optional_int",
    "optional_bool",
    # Formatters
    "format_flags",
    "format_link",
    "shorten_text",
]
