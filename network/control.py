"""Adapter enable/disable.

Invokes Win32_NetworkAdapter Enable/Disable through PowerShell. Requires an
elevated process; elevation itself is left to the caller.
"""

import config
from errors import AdapterControlError, AdapterNotFoundError
from logging_config import get_logger
from utils import run_powershell, sanitize_for_log

logger = get_logger(__name__)


def _escape_wql(value: str) -> str:
    """Escape a value for a single-quoted WQL string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _escape_powershell_double_quoted(value: str) -> str:
    """Escape a value for a PowerShell double-quoted string."""
    return value.replace("`", "``").replace('"', '`"').replace("$", "`$")


def build_control_script(adapter_name: str, enable: bool) -> str:
    """Build the PowerShell script toggling one adapter.

    The adapter is matched on NetConnectionID or Name.

    Args:
        adapter_name: Connection name
        enable: True to enable, False to disable

    Returns:
        Script text.
    """
    wql_name = _escape_wql(adapter_name)
    wql_filter = f"NetConnectionID='{wql_name}' OR Name='{wql_name}'"
    return config.ADAPTER_CONTROL_SCRIPT.format(
        filter=_escape_powershell_double_quoted(wql_filter),
        method="Enable" if enable else "Disable",
    )


def parse_control_output(adapter_name: str, enable: bool, output: str | None) -> int:
    """Interpret the control script output.

    Args:
        adapter_name: Connection name
        enable: Requested state
        output: Script stdout or None

    Returns:
        Success result code (0 or 1).

    Raises:
        AdapterNotFoundError: No adapter matched the name.
        AdapterControlError: Missing output or a non-success code.
    """
    if not output:
        raise AdapterControlError(adapter_name, enable)

    last_line = output.strip().splitlines()[-1].strip()
    if last_line == config.ADAPTER_NOT_FOUND_MARKER:
        raise AdapterNotFoundError(adapter_name)

    try:
        code = int(last_line)
    except ValueError:
        raise AdapterControlError(adapter_name, enable) from None

    if code not in config.CONTROL_SUCCESS_CODES:
        raise AdapterControlError(adapter_name, enable, code)

    return code


def set_adapter_state(adapter_name: str, enable: bool) -> None:
    """Enable or disable an adapter by connection name.

    Args:
        adapter_name: Connection name
        enable: True to enable, False to disable

    Raises:
        AdapterNotFoundError: No adapter matched the name.
        AdapterControlError: The request failed.
    """
    logger.info(
        "%s adapter %s",
        "Enabling" if enable else "Disabling",
        sanitize_for_log(adapter_name),
    )
    output = run_powershell(
        build_control_script(adapter_name, enable),
        timeout=config.CONTROL_TIMEOUT_SECONDS,
        fallback=False,
    )
    code = parse_control_output(adapter_name, enable, output)
    logger.debug("[%s] Result code: %d", sanitize_for_log(adapter_name), code)
