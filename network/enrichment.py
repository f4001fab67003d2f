"""Adapter metadata and IPv4 address lookups.

Both lookups are batch queries returning maps that the fusion step joins
against; duplicate keys keep the first value seen.
"""

from typing import Any

import config
from logging_config import get_logger
from models import EnrichmentFields
from utils import (
    is_valid_ipv4,
    load_json_rows,
    name_key,
    optional_bool,
    optional_int,
    optional_str,
    run_powershell,
)

logger = get_logger(__name__)


def parse_metadata_rows(rows: list[dict[str, Any]]) -> dict[str, EnrichmentFields]:
    """Build the metadata map from Win32_NetworkAdapter rows.

    Args:
        rows: Parsed JSON objects

    Returns:
        Dict keyed by case-folded connection name (first seen wins).
    """
    result: dict[str, EnrichmentFields] = {}
    for row in rows:
        connection_name = optional_str(row.get("NetConnectionID"))
        if not connection_name:
            continue

        key = name_key(connection_name)
        if key in result:
            continue

        result[key] = EnrichmentFields(
            full_name=optional_str(row.get("Name")) or connection_name,
            source_type=optional_str(row.get("AdapterType")),
            physical_adapter=optional_bool(row.get("PhysicalAdapter")),
            device_id=optional_str(row.get("PNPDeviceID")),
            service_name=optional_str(row.get("ServiceName")),
            manufacturer=optional_str(row.get("Manufacturer")),
        )
    return result


def parse_address_rows(rows: list[dict[str, Any]]) -> dict[int, str]:
    """Build the IPv4 map from Win32_NetworkAdapterConfiguration rows.

    Takes the first valid IPv4 entry of IPAddress (IPv6 entries skipped).

    Args:
        rows: Parsed JSON objects

    Returns:
        Dict mapping interface index to IPv4 address (first seen wins).
    """
    result: dict[int, str] = {}
    for row in rows:
        index = optional_int(row.get("InterfaceIndex"))
        if index is None or index in result:
            continue

        addresses = row.get("IPAddress")
        if isinstance(addresses, str):
            addresses = [addresses]
        if not isinstance(addresses, list):
            continue

        for address in addresses:
            if isinstance(address, str) and is_valid_ipv4(address.strip()):
                result[index] = address.strip()
                break
    return result


def load_adapter_metadata() -> dict[str, EnrichmentFields]:
    """Query descriptive adapter fields keyed by connection name.

    Returns:
        Metadata map, or {} if the query fails.
    """
    output = run_powershell(config.WMI_ADAPTER_SCRIPT)
    if not output:
        logger.debug("Adapter metadata query returned no output")
        return {}
    return parse_metadata_rows(load_json_rows(output))


def load_ipv4_by_index() -> dict[int, str]:
    """Query the first IPv4 address of every IP-enabled interface.

    Returns:
        Address map, or {} if the query fails.
    """
    output = run_powershell(config.WMI_ADDRESS_SCRIPT)
    if not output:
        logger.debug("Address query returned no output")
        return {}
    return parse_address_rows(load_json_rows(output))


def lookup_metadata(metadata: dict[str, EnrichmentFields], name: str) -> EnrichmentFields | None:
    """Find metadata for an adapter name (case-insensitive)."""
    return metadata.get(name_key(name))
