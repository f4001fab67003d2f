"""Input validation utilities.

Provides validation for adapter names, IP addresses and the loosely typed
values found in provider JSON output.
"""

import ipaddress
from typing import Any

MAX_ADAPTER_NAME_LENGTH: int = 256


def validate_adapter_name(name: str | None) -> bool:
    """Validate adapter connection name.

    Connection names are user-editable and may contain spaces and
    punctuation, so only emptiness, length and control characters are
    rejected.

    Args:
        name: Adapter name to validate

    Returns:
        True if valid, False otherwise.
    """
    if not name or not name.strip():
        return False

    if len(name) > MAX_ADAPTER_NAME_LENGTH:
        return False

    return all(c.isprintable() for c in name)


def is_valid_ipv4(address: str | None) -> bool:
    """Validate IPv4 address.

    Args:
        address: IPv4 address string or None

    Returns:
        True if valid IPv4 address, False otherwise.
    """
    if not address:
        return False
    try:
        ipaddress.IPv4Address(address)
        return True
    except ValueError:
        return False


def optional_str(value: Any) -> str | None:
    """Return a stripped string, or None for missing/blank/non-string values."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def optional_int(value: Any) -> int | None:
    """Return a non-negative int, or None.

    JSON booleans are rejected even though bool is an int subclass.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def optional_bool(value: Any) -> bool | None:
    """Return a JSON boolean, or None for anything else."""
    return value if isinstance(value, bool) else None
