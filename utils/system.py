"""System command execution utilities.

Provides safe command execution with timeout protection.
Never uses shell=True to prevent command injection.
"""

import json
import re
import shutil
import subprocess
from typing import Any

import config


def run_command(cmd: list[str], timeout: float | None = None) -> str | None:
    """Execute system command safely.

    Security:
        - NEVER shell=True
        - Timeout: ENUMERATION_TIMEOUT_SECONDS unless given

    Args:
        cmd: Command as list (e.g., ["powershell.exe", "-Command", "..."])
        timeout: Seconds to wait before giving up

    Returns:
        Command output (stripped) or None on error, timeout or non-zero exit.
    """
    if timeout is None:
        timeout = config.ENUMERATION_TIMEOUT_SECONDS

    try:
        result = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
            shell=False,
        )
    except subprocess.TimeoutExpired:
        return None
    except (OSError, ValueError, RuntimeError):
        # Missing host binary surfaces as FileNotFoundError
        return None

    return result.stdout.strip() if result.returncode == 0 else None


def run_powershell(
    script: str, timeout: float | None = None, fallback: bool = True
) -> str | None:
    """Run a PowerShell script, trying each configured host in order.

    With fallback disabled the script runs once, on the first host found
    on PATH. Scripts that change system state must not be re-sent after a
    timeout or a failed run.

    Args:
        script: Script text passed to -Command
        timeout: Seconds to wait per host
        fallback: Retry on the next host when a host produces no output

    Returns:
        First non-empty output, or None if every host failed.
    """
    if not fallback:
        host = next((h for h in config.POWERSHELL_HOSTS if command_exists(h)), None)
        if host is None:
            return None
        return run_command([host, *config.POWERSHELL_ARGS, script], timeout=timeout) or None

    for host in config.POWERSHELL_HOSTS:
        output = run_command([host, *config.POWERSHELL_ARGS, script], timeout=timeout)
        if output:
            return output
    return None


def load_json_rows(output: str | None) -> list[dict[str, Any]]:
    """Parse ConvertTo-Json output into a list of objects.

    ConvertTo-Json emits a bare object for a single result and an array
    otherwise. Non-object entries are dropped.

    Args:
        output: Raw JSON text or None

    Returns:
        List of row dicts (empty on missing or malformed output).
    """
    if not output:
        return []

    try:
        data = json.loads(output)
    except json.JSONDecodeError:
        return []

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        return []

    return [row for row in data if isinstance(row, dict)]


def command_exists(cmd: str) -> bool:
    """Check if command exists in PATH.

    Args:
        cmd: Command name (e.g., "pwsh")

    Returns:
        True if command is available, False otherwise.
    """
    return shutil.which(cmd) is not None


def sanitize_for_log(value: Any) -> str:
    """Sanitize values before logging to prevent log injection.

    Removes:
        - Newlines
        - ANSI escape codes
        - Control characters

    Max length: 200 characters

    Args:
        value: Value to sanitize (any type, will be converted to string)

    Returns:
        Sanitized string safe for logging.
    """
    text = str(value)

    # Remove newlines
    text = text.replace("\n", " ").replace("\r", " ")

    # Remove ANSI escape codes
    text = re.sub(r"\x1b\[[0-9;]*m", "", text)

    # Remove control characters
    text = "".join(c for c in text if c.isprintable() or c.isspace())

    # Truncate
    if len(text) > 200:
        text = text[:197] + "..."

    return text
