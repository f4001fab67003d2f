"""Exceptions raised by switch operations.

Discovery never raises: provider failures surface as empty results.
Only the switch path reports errors to the caller.
"""


class NetSwitchError(Exception):
    """Base class for reportable netswitch errors."""


class AdapterNotFoundError(NetSwitchError):
    """Selected adapter is absent from the current snapshot."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Network adapter '{name}' was not found")
        self.name = name


class AdapterControlError(NetSwitchError):
    """Enable/disable request returned a failure code (or nothing)."""

    def __init__(self, name: str, enable: bool, code: int | None = None) -> None:
        action = "enable" if enable else "disable"
        if code is None:
            message = f"Failed to {action} '{name}': no result returned"
        else:
            message = f"Failed to {action} '{name}'. WMI code: {code}"
        super().__init__(message)
        self.name = name
        self.enable = enable
        self.code = code


class CooldownActiveError(NetSwitchError):
    """Switch attempted while the cooldown window is open."""

    def __init__(self, remaining_seconds: int) -> None:
        super().__init__(f"Next switch available in {remaining_seconds} s")
        self.remaining_seconds = remaining_seconds


class SelectionIncompleteError(NetSwitchError):
    """Switch requires exactly two selected adapters."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Select exactly two adapters (currently {count})")
        self.count = count


class ControllerBusyError(NetSwitchError):
    """A discovery or switch operation is already in flight."""

    def __init__(self) -> None:
        super().__init__("Another operation is already running")
