"""Text formatting utilities for DISPLAY ONLY.

All helpers work on display data, never on raw data.
Raw data in models.py remains unchanged for data integrity.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models import AdapterRecord


def shorten_text(text: str, max_length: int) -> str:
    """Truncate text with ellipsis if too long.

    Args:
        text: Text to truncate
        max_length: Maximum length including ellipsis

    Returns:
        Original text or truncated text ending in "...".
    """
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."


def format_flags(adapter: "AdapterRecord") -> str:
    """Short flag column for an adapter.

    Examples:
        virtual adapter -> "virtual"
        bluetooth adapter -> "bt"
        physical adapter -> "--"

    Args:
        adapter: Adapter record

    Returns:
        Comma-joined flags or "--".
    """
    flags = []
    if adapter.is_virtual:
        flags.append("virtual")
    if adapter.is_bluetooth:
        flags.append("bt")
    return ",".join(flags) or "--"


def format_link(adapter: "AdapterRecord") -> str:
    """Link column: "up" or "down"."""
    return "up" if adapter.connected else "down"
