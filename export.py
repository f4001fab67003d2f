"""JSON export functionality.

Exports the adapter snapshot to JSON format with metadata.
"""

import json
from datetime import datetime, timezone
from typing import Any

import config
from models import AdapterRecord, Preferences


def export_to_json(
    adapters: list[AdapterRecord],
    preferences: Preferences | None = None,
    indent: int = 2,
) -> str:
    """Export to JSON format with metadata.

    Args:
        adapters: Adapter snapshot
        preferences: Optional preferences (adds the current selection)
        indent: JSON indentation (default 2)

    Returns:
        JSON string with metadata and adapter data.
    """
    metadata: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "adapter_count": len(adapters),
        "tool": config.TOOL_NAME,
        "version": config.VERSION,
        "summary": {
            "enabled": sum(1 for a in adapters if a.admin_enabled),
            "connected": sum(1 for a in adapters if a.connected),
            "virtual": sum(1 for a in adapters if a.is_virtual),
            "bluetooth": sum(1 for a in adapters if a.is_bluetooth),
        },
    }
    if preferences is not None:
        metadata["selection"] = list(preferences.selection.names)

    output = {
        "metadata": metadata,
        "adapters": [_adapter_to_dict(a) for a in adapters],
    }

    return json.dumps(output, indent=indent)


def _adapter_to_dict(adapter: AdapterRecord) -> dict[str, Any]:
    """Convert AdapterRecord to a JSON-ready dictionary.

    Args:
        adapter: AdapterRecord object

    Returns:
        Dictionary representation suitable for JSON serialization.
    """
    return {
        "name": adapter.name,
        "full_name": adapter.full_name,
        "type": adapter.type_label,
        "admin_enabled": adapter.admin_enabled,
        "connected": adapter.connected,
        "ipv4": adapter.ipv4,
        "is_virtual": adapter.is_virtual,
        "is_bluetooth": adapter.is_bluetooth,
    }
