"""Redundant, best-effort preference persistence.

The same settings file is written to every configured location. Loading
picks the most recently modified copy that still parses, so a corrupted or
stale copy in one location never loses the user's settings. No error from
the file system ever reaches the caller.
"""

import json
import os
import stat
import sys
from pathlib import Path
from typing import Any, Iterable, Sequence

import config
from enums import Language, Theme
from logging_config import get_logger
from models import Preferences, SelectionState
from utils import run_command, sanitize_for_log

logger = get_logger(__name__)

# (path, modification time, file content)
Candidate = tuple[Path, float, str]


def serialize_preferences(prefs: Preferences) -> str:
    """Serialize preferences to the settings file format.

    Args:
        prefs: Preferences to write

    Returns:
        Indented JSON object.
    """
    data = {
        "Theme": prefs.theme.value,
        "Language": prefs.language.value,
        "ShowVirtual": prefs.show_virtual,
        "ShowBluetooth": prefs.show_bluetooth,
        "AdapterA": prefs.selection.primary,
        "AdapterB": prefs.selection.secondary,
    }
    return json.dumps(data, indent=2)


def parse_preferences(content: str) -> Preferences:
    """Parse settings file content.

    Rules:
        - Content must be a JSON object
        - Theme "light" (any case) -> LIGHT, anything else -> DARK
        - Unknown Language -> ENGLISH
        - Missing booleans -> False
        - AdapterB dropped when it equals AdapterA (case-insensitive)

    Args:
        content: File content

    Returns:
        Parsed Preferences.

    Raises:
        ValueError: Content is not a JSON object.
    """
    data: Any = json.loads(content)  # JSONDecodeError is a ValueError
    if not isinstance(data, dict):
        raise ValueError("settings root is not an object")

    theme_value = data.get("Theme")
    theme = (
        Theme.LIGHT
        if isinstance(theme_value, str) and theme_value.strip().lower() == Theme.LIGHT.value
        else Theme.DARK
    )

    adapter_a = data.get("AdapterA")
    adapter_b = data.get("AdapterB")

    return Preferences(
        theme=theme,
        language=Language.parse(data.get("Language")),
        show_virtual=data.get("ShowVirtual") is True,
        show_bluetooth=data.get("ShowBluetooth") is True,
        selection=SelectionState.from_pair(
            adapter_a if isinstance(adapter_a, str) else None,
            adapter_b if isinstance(adapter_b, str) else None,
        ),
    )


def pick_newest(candidates: Iterable[Candidate]) -> Preferences | None:
    """Choose preferences from the newest candidate that parses.

    Recency, not list order, decides between candidates.

    Args:
        candidates: (path, mtime, content) tuples

    Returns:
        Parsed Preferences, or None if no candidate parses.
    """
    ordered = sorted(candidates, key=lambda candidate: candidate[1], reverse=True)
    for path, _, content in ordered:
        try:
            prefs = parse_preferences(content)
        except ValueError:
            logger.debug("Ignoring unreadable settings file %s", sanitize_for_log(path))
            continue
        logger.debug("Loaded settings from %s", sanitize_for_log(path))
        return prefs
    return None


def _clear_read_only(path: Path) -> None:
    mode = path.stat().st_mode
    if not mode & stat.S_IWRITE:
        path.chmod(mode | stat.S_IWRITE)


def _mark_hidden(path: Path) -> None:
    """Set the hidden attribute (Windows only, run_command never raises)."""
    if sys.platform != "win32":
        return
    run_command(["attrib", "+H", str(path)])


def write_atomic(target: Path, content: str) -> None:
    """Write one settings file via a sibling temp file.

    Steps: create directory, clear read-only, write <target>.tmp, remove
    the existing target, rename the temp file into place, mark hidden.

    Args:
        target: Settings file path
        content: Serialized preferences

    Raises:
        OSError: Any file system step failed (hiding excepted).
    """
    target.parent.mkdir(parents=True, exist_ok=True)

    if target.exists():
        _clear_read_only(target)

    temp_path = target.with_name(target.name + config.TEMP_SUFFIX)
    temp_path.write_text(content, encoding="utf-8")

    if target.exists():
        target.unlink()

    os.replace(temp_path, target)
    _mark_hidden(target)


class PreferenceStore:
    """Fan-out preference persistence over injected file locations."""

    def __init__(self, targets: Sequence[Path] | None = None) -> None:
        if targets is None:
            targets = config.default_preference_paths()
        self.targets = [Path(target) for target in targets]

    def save(self, prefs: Preferences) -> int:
        """Write preferences to every target independently.

        Args:
            prefs: Preferences to persist

        Returns:
            Number of targets written successfully.
        """
        content = serialize_preferences(prefs)
        written = 0
        for target in self.targets:
            try:
                write_atomic(target, content)
            except OSError as e:
                logger.debug(
                    "Could not write settings to %s: %s",
                    sanitize_for_log(target),
                    sanitize_for_log(str(e)),
                )
                continue
            written += 1
        return written

    def read_candidates(self) -> list[Candidate]:
        """Collect (path, mtime, content) for existing readable targets."""
        candidates = []
        for target in self.targets:
            try:
                if not target.is_file():
                    continue
                candidates.append(
                    (target, target.stat().st_mtime, target.read_text(encoding="utf-8"))
                )
            except (OSError, UnicodeDecodeError) as e:
                logger.debug(
                    "Could not read settings from %s: %s",
                    sanitize_for_log(target),
                    sanitize_for_log(str(e)),
                )
        return candidates

    def load(self) -> Preferences:
        """Load the newest parseable preferences, or defaults.

        Returns:
            Preferences (defaults if nothing usable exists).
        """
        prefs = pick_newest(self.read_candidates())
        if prefs is None:
            logger.debug("No usable settings file, using defaults")
            return Preferences.create_default()
        return prefs
