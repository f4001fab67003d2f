"""Configuration constants for netswitch.

All configurable values stored here for easy customization.
Single source of truth for all constants and configuration.
"""

import os
import tempfile
from enum import IntEnum
from pathlib import Path

# Timeouts (seconds)
ENUMERATION_TIMEOUT_SECONDS: int = 5
CONTROL_TIMEOUT_SECONDS: int = 15

# Switch cooldown
SWITCH_COOLDOWN_SECONDS: float = 5.0

# PowerShell hosts, tried in order (Windows PowerShell first, then Core)
POWERSHELL_HOSTS: list[str] = ["powershell.exe", "pwsh"]
POWERSHELL_ARGS: list[str] = [
    "-NoProfile",
    "-NonInteractive",
    "-ExecutionPolicy",
    "Bypass",
    "-Command",
]

# Primary inventory: NetAdapter cmdlet, JSON output
NET_ADAPTER_SCRIPT: str = (
    "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8; "
    "Get-NetAdapter | Select-Object Name, InterfaceDescription, Status, ifIndex, "
    "ifType, InterfaceName, PnPDeviceID, Virtual, HardwareInterface, "
    "DriverDescription | ConvertTo-Json -Compress"
)

# Instrumentation queries (CIM), used for fallback enumeration and enrichment
WMI_ADAPTER_SCRIPT: str = (
    "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8; "
    "Get-CimInstance -ClassName Win32_NetworkAdapter | Select-Object "
    "InterfaceIndex, NetConnectionID, Name, AdapterType, NetConnectionStatus, "
    "ConfigManagerErrorCode, PhysicalAdapter, PNPDeviceID, ServiceName, "
    "Manufacturer | ConvertTo-Json -Compress"
)

WMI_ADDRESS_SCRIPT: str = (
    "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8; "
    "Get-CimInstance -ClassName Win32_NetworkAdapterConfiguration "
    "-Filter 'IPEnabled = True' | Select-Object InterfaceIndex, IPAddress "
    "| ConvertTo-Json -Compress"
)

# Adapter control: {filter} is a WQL condition, {method} is Enable/Disable
ADAPTER_CONTROL_SCRIPT: str = (
    "$adapter = Get-CimInstance -ClassName Win32_NetworkAdapter "
    '-Filter "{filter}" | Select-Object -First 1; '
    "if ($null -eq $adapter) {{ Write-Output 'NOT_FOUND'; exit 0 }}; "
    "(Invoke-CimMethod -InputObject $adapter -MethodName {method}).ReturnValue"
)
ADAPTER_NOT_FOUND_MARKER: str = "NOT_FOUND"

# Win32_NetworkAdapter Enable/Disable: 0 = done, 1 = done after restart
CONTROL_SUCCESS_CODES: frozenset[int] = frozenset({0, 1})

# Win32_NetworkAdapter status values
WMI_CONFIG_ERROR_DISABLED: int = 22
WMI_CONNECTION_STATUS_CONNECTED: int = 2

# NetAdapter status strings (compared case-insensitively)
STATUS_DISABLED: str = "disabled"
STATUS_UP: str = "up"

# IANA ifType codes
IF_TYPE_ETHERNET: int = 6
IF_TYPE_PPP: int = 23
IF_TYPE_LOOPBACK: int = 24
IF_TYPE_PROP_VIRTUAL: int = 53
IF_TYPE_WIFI: int = 71
IF_TYPE_TUNNEL: int = 131

# IANA defines no Bluetooth ifType; set this if a driver reports one
IF_TYPE_BLUETOOTH: int | None = None

VIRTUAL_IF_TYPES: frozenset[int] = frozenset(
    {IF_TYPE_LOOPBACK, IF_TYPE_PROP_VIRTUAL, IF_TYPE_TUNNEL}
)

# Device instance path prefixes (normalized, lowercase)
BLUETOOTH_DEVICE_PREFIXES: tuple[str, ...] = ("bth\\",)
PHYSICAL_BUS_PREFIXES: tuple[str, ...] = ("pci\\", "usb\\", "pcip\\")

# Keyword sets, matched against normalized text (lowercase, no whitespace).
BLUETOOTH_KEYWORDS: tuple[str, ...] = ("bluetooth", "bth", "btpan")

VIRTUAL_KEYWORDS: tuple[str, ...] = (
    "virtual",
    "vethernet",
    "hyper-v",
    "hyperv",
    "vmware",
    "vbox",
    "virtualbox",
    "loopback",
    "tunnel",
    "tap",
    "tap-",
    "tap0901",
    "wintun",
    "wireguard",
    "zerotier",
    "tailscale",
    "hamachi",
    "openvpn",
    "nordlynx",
    "nordvpn",
    "expressvpn",
    "protonvpn",
    "surfshark",
    "mullvad",
    "windscribe",
    "fortinet",
    "forticlient",
    "anyconnect",
    "globalprotect",
    "pangp",
    "softether",
    "radmin",
)

WIFI_KEYWORDS: tuple[str, ...] = ("wi-fi", "wifi", "wireless", "wlan", "802.11")
LOOPBACK_KEYWORDS: tuple[str, ...] = ("loopback",)
TUNNEL_KEYWORDS: tuple[str, ...] = (
    "tunnel",
    "wintun",
    "wireguard",
    "openvpn",
    "tap-",
    "tap0901",
    "teredo",
    "isatap",
)
ETHERNET_KEYWORDS: tuple[str, ...] = ("ethernet", "gbe", "gigabit", "802.3")

# Preference storage
PREFERENCES_FOLDER: str = "NetSwitch"
PREFERENCES_FILE: str = "settings.json"
TEMP_SUFFIX: str = ".tmp"


def default_preference_paths() -> list[Path]:
    """Build the candidate preference file locations.

    Order: machine-wide, user temp, user local. Falls back to portable
    locations when the Windows environment variables are missing.

    Returns:
        List of candidate settings file paths.
    """
    program_data = os.environ.get("PROGRAMDATA")
    local_app_data = os.environ.get("LOCALAPPDATA")

    machine_root = Path(program_data) if program_data else Path("/var/lib")
    if local_app_data:
        temp_root = Path(local_app_data) / "Temp"
        local_root = Path(local_app_data)
    else:
        temp_root = Path(tempfile.gettempdir())
        local_root = Path.home() / ".local" / "share"

    return [
        root / PREFERENCES_FOLDER / PREFERENCES_FILE
        for root in (machine_root, temp_root, local_root)
    ]


# Table Configuration
TABLE_COLUMNS: list[tuple[str, int]] = [
    ("ADAPTER", 24),
    ("TYPE", 10),
    ("STATUS", 8),
    ("LINK", 4),
    ("IPV4", 15),
    ("FLAGS", 9),
    ("DESCRIPTION", 40),
]

COLUMN_SEPARATOR: str = "   "  # 3 spaces


# Exit Codes (Professional: Use IntEnum)
class ExitCode(IntEnum):
    """Standard exit codes for netswitch."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    MISSING_DEPENDENCIES = 2
    INVALID_ARGUMENTS = 4
    SWITCH_REFUSED = 5
    SWITCH_FAILED = 6


# Tool Metadata
VERSION: str = "1.0.0"
TOOL_NAME: str = "netswitch"
