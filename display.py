"""Plain-text table output.

Prints the adapter snapshot and the current preferences. Output is plain
text; no colors or themes are applied here.
"""

import sys
from typing import TextIO

import config
from models import AdapterRecord, Preferences
from utils import format_flags, format_link, names_equal, shorten_text


def _table_width() -> int:
    widths = [width for _, width in config.TABLE_COLUMNS]
    return sum(widths) + len(config.COLUMN_SEPARATOR) * (len(widths) - 1)


def _selection_marker(adapter: AdapterRecord, preferences: Preferences | None) -> str:
    if preferences is None:
        return ""
    names = preferences.selection.names
    for position, name in enumerate(names, start=1):
        if names_equal(name, adapter.name):
            return f"[{position}] "
    return ""


def format_output(
    adapters: list[AdapterRecord],
    preferences: Preferences | None = None,
    file: TextIO | None = None,
) -> None:
    """Print adapters as a table.

    Selected adapters are prefixed with their position ([1] primary,
    [2] secondary).

    Args:
        adapters: Adapters to display
        preferences: Current preferences (for selection markers)
        file: Optional file handle (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    width = _table_width()
    print("=" * width, file=file)
    print("Network Adapters", file=file)
    print("=" * width, file=file)

    headers = [name.ljust(col_width) for name, col_width in config.TABLE_COLUMNS]
    print(config.COLUMN_SEPARATOR.join(headers).rstrip(), file=file)
    print("-" * width, file=file)

    for adapter in adapters:
        row_data = [
            _selection_marker(adapter, preferences) + adapter.name,
            adapter.type_label,
            adapter.status_text,
            format_link(adapter),
            adapter.ipv4 or "--",
            format_flags(adapter),
            adapter.full_name,
        ]

        row_parts = []
        for (_, col_width), data in zip(config.TABLE_COLUMNS, row_data):
            row_parts.append(shorten_text(str(data), col_width).ljust(col_width))
        print(config.COLUMN_SEPARATOR.join(row_parts).rstrip(), file=file)

    print("=" * width, file=file)
    print(f"{len(adapters)} adapter(s)", file=file)


def format_preferences(preferences: Preferences, file: TextIO | None = None) -> None:
    """Print preferences as key/value lines.

    Args:
        preferences: Preferences to show
        file: Optional file handle (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    selection = preferences.selection
    print(f"Theme:          {preferences.theme.value}", file=file)
    print(f"Language:       {preferences.language.value}", file=file)
    print(f"Show virtual:   {'on' if preferences.show_virtual else 'off'}", file=file)
    print(f"Show bluetooth: {'on' if preferences.show_bluetooth else 'off'}", file=file)
    print(f"Primary:        {selection.primary or '--'}", file=file)
    print(f"Secondary:      {selection.secondary or '--'}", file=file)
