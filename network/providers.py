"""Adapter data sources.

Each source enumerates adapters from one OS facility and never raises:
launch failures, timeouts, non-zero exits and malformed output all give an
empty list. Sources are tried in priority order and the first non-empty
result wins (later sources are fallbacks, never merged).
"""

from typing import Any, Protocol, Sequence

import config
from logging_config import get_logger
from models import RawAdapterRecord
from utils import (
    load_json_rows,
    optional_bool,
    optional_int,
    optional_str,
    run_powershell,
    sanitize_for_log,
    validate_adapter_name,
)

logger = get_logger(__name__)


class AdapterSource(Protocol):
    """Capability shared by all adapter data sources."""

    name: str

    def enumerate(self) -> list[RawAdapterRecord]:
        """Return raw adapter records (empty on any failure)."""
        ...


def parse_net_adapter_rows(rows: list[dict[str, Any]]) -> list[RawAdapterRecord]:
    """Convert Get-NetAdapter JSON rows into raw records.

    Status mapping (case-insensitive):
        "Disabled" -> admin disabled, anything else -> enabled
        "Up" -> connected

    Rows without a usable Name are skipped.

    Args:
        rows: Parsed JSON objects

    Returns:
        List of RawAdapterRecord.
    """
    records = []
    for row in rows:
        name = optional_str(row.get("Name"))
        if not name or not validate_adapter_name(name):
            continue

        status = optional_str(row.get("Status"))
        admin_enabled = None
        connected = None
        if status is not None:
            admin_enabled = status.casefold() != config.STATUS_DISABLED
            connected = status.casefold() == config.STATUS_UP

        records.append(
            RawAdapterRecord(
                name=name,
                full_name=optional_str(row.get("InterfaceDescription")),
                admin_enabled=admin_enabled,
                connected=connected,
                index=optional_int(row.get("ifIndex")),
                if_type=optional_int(row.get("ifType")),
                hardware_interface=optional_bool(row.get("HardwareInterface")),
                reported_virtual=optional_bool(row.get("Virtual")),
                device_id=optional_str(row.get("PnPDeviceID")),
                driver_description=optional_str(row.get("DriverDescription")),
                interface_name=optional_str(row.get("InterfaceName")),
            )
        )
    return records


def parse_wmi_adapter_rows(rows: list[dict[str, Any]]) -> list[RawAdapterRecord]:
    """Convert Win32_NetworkAdapter JSON rows into raw records.

    Mapping:
        NetConnectionID -> name (rows without one are skipped)
        ConfigManagerErrorCode == 22 -> admin disabled
        NetConnectionStatus == 2 -> connected

    Args:
        rows: Parsed JSON objects

    Returns:
        List of RawAdapterRecord.
    """
    records = []
    for row in rows:
        name = optional_str(row.get("NetConnectionID"))
        if not name or not validate_adapter_name(name):
            continue

        error_code = optional_int(row.get("ConfigManagerErrorCode"))
        connection_status = optional_int(row.get("NetConnectionStatus"))

        records.append(
            RawAdapterRecord(
                name=name,
                full_name=optional_str(row.get("Name")) or name,
                admin_enabled=(
                    None if error_code is None
                    else error_code != config.WMI_CONFIG_ERROR_DISABLED
                ),
                connected=(
                    None if connection_status is None
                    else connection_status == config.WMI_CONNECTION_STATUS_CONNECTED
                ),
                index=optional_int(row.get("InterfaceIndex")),
                physical_adapter=optional_bool(row.get("PhysicalAdapter")),
                device_id=optional_str(row.get("PNPDeviceID")),
                service_name=optional_str(row.get("ServiceName")),
                manufacturer=optional_str(row.get("Manufacturer")),
                source_type=optional_str(row.get("AdapterType")),
            )
        )
    return records


class PowerShellAdapterSource:
    """Primary source: Get-NetAdapter inventory as JSON."""

    name = "Get-NetAdapter"

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout if timeout is not None else config.ENUMERATION_TIMEOUT_SECONDS

    def enumerate(self) -> list[RawAdapterRecord]:
        output = run_powershell(config.NET_ADAPTER_SCRIPT, timeout=self.timeout)
        if not output:
            logger.debug("%s returned no output", self.name)
            return []
        return parse_net_adapter_rows(load_json_rows(output))


class WmiAdapterSource:
    """Fallback source: Win32_NetworkAdapter instrumentation query."""

    name = "Win32_NetworkAdapter"

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout if timeout is not None else config.ENUMERATION_TIMEOUT_SECONDS

    def enumerate(self) -> list[RawAdapterRecord]:
        output = run_powershell(config.WMI_ADAPTER_SCRIPT, timeout=self.timeout)
        if not output:
            logger.debug("%s returned no output", self.name)
            return []
        return parse_wmi_adapter_rows(load_json_rows(output))


def default_sources() -> list[AdapterSource]:
    """Sources in priority order: NetAdapter inventory, then WMI."""
    return [PowerShellAdapterSource(), WmiAdapterSource()]


def enumerate_first_available(sources: Sequence[AdapterSource]) -> list[RawAdapterRecord]:
    """Enumerate sources sequentially until one yields records.

    Args:
        sources: Sources in priority order

    Returns:
        Records from the first non-empty source, or [] if all are empty.
    """
    for source in sources:
        try:
            records = source.enumerate()
        except (OSError, ValueError, TypeError, RuntimeError) as e:
            logger.warning(
                "Adapter source %s failed: %s",
                source.name,
                sanitize_for_log(str(e)),
            )
            continue

        if records:
            logger.info("Adapter source %s returned %d adapters", source.name, len(records))
            return records

        logger.info("Adapter source %s returned nothing, trying next", source.name)

    logger.warning("No adapter source returned data")
    return []
