"""Data models for network adapter information.

All models use dataclasses for type safety.
None in a raw record means "unknown", never "false".

Architecture:
- RawAdapterRecord: partial row from one data source
- EnrichmentFields: descriptive fields looked up by connection name
- AdapterRecord: fused, classified adapter (one per name per snapshot)
- SwitchPlan: target states for the selected pair
- SelectionState / Preferences: user choices persisted between runs
"""

from dataclasses import dataclass, field

from enums import AdapterType, Language, Theme
from utils.text import names_equal

MAX_SELECTED: int = 2


@dataclass
class RawAdapterRecord:
    """Adapter row as reported by a single provider."""

    name: str  # Connection name (identity key)
    full_name: str | None = None  # Interface description
    admin_enabled: bool | None = None  # From status / config error code
    connected: bool | None = None  # Link up
    index: int | None = None  # Interface index
    if_type: int | None = None  # IANA ifType code
    physical_adapter: bool | None = None
    hardware_interface: bool | None = None
    reported_virtual: bool | None = None
    device_id: str | None = None  # PnP device instance path
    service_name: str | None = None
    driver_description: str | None = None
    manufacturer: str | None = None
    source_type: str | None = None  # Raw adapter-type label
    interface_name: str | None = None  # e.g. "ethernet_32768"


@dataclass(frozen=True)
class EnrichmentFields:
    """Descriptive fields supplied by the metadata query."""

    full_name: str | None = None
    source_type: str | None = None
    physical_adapter: bool | None = None
    device_id: str | None = None
    service_name: str | None = None
    manufacturer: str | None = None


@dataclass(frozen=True)
class AdapterRecord:
    """Fused and classified adapter."""

    name: str  # Canonical name, compared case-insensitively
    full_name: str
    adapter_type: AdapterType | str  # Enum member or raw source label
    admin_enabled: bool
    connected: bool
    ipv4: str | None
    is_virtual: bool
    is_bluetooth: bool

    @property
    def status_text(self) -> str:
        """Human-readable admin state."""
        return "Enabled" if self.admin_enabled else "Disabled"

    @property
    def type_label(self) -> str:
        """Adapter type as plain text."""
        if isinstance(self.adapter_type, AdapterType):
            return self.adapter_type.value
        return self.adapter_type


@dataclass(frozen=True)
class SwitchPlan:
    """Target admin states for the selected pair (exactly one enabled)."""

    first: str
    second: str
    enable_first: bool
    enable_second: bool


@dataclass
class SelectionState:
    """Ordered pair of selected adapter names (primary, secondary).

    Position, not click recency, decides the switch tie-break.
    """

    names: list[str] = field(default_factory=list)

    @property
    def primary(self) -> str | None:
        return self.names[0] if self.names else None

    @property
    def secondary(self) -> str | None:
        return self.names[1] if len(self.names) > 1 else None

    @property
    def is_complete(self) -> bool:
        return len(self.names) == MAX_SELECTED

    def contains(self, name: str) -> bool:
        return any(names_equal(selected, name) for selected in self.names)

    def toggle(self, name: str) -> None:
        """Deselect a selected name, otherwise select it.

        When two names are already selected the oldest (primary) is
        evicted and the new name becomes the secondary.

        Args:
            name: Adapter name
        """
        if self.contains(name):
            self.names = [n for n in self.names if not names_equal(n, name)]
            return

        if len(self.names) >= MAX_SELECTED:
            self.names.pop(0)
        self.names.append(name)

    def prune(self, available: list[str]) -> bool:
        """Drop selected names missing from `available`.

        Args:
            available: Names currently present

        Returns:
            True if the selection changed.
        """
        kept = [
            name for name in self.names
            if any(names_equal(name, other) for other in available)
        ]
        changed = len(kept) != len(self.names)
        self.names = kept
        return changed

    @classmethod
    def from_pair(cls, first: str | None, second: str | None) -> "SelectionState":
        """Build from two stored names, dropping blanks and duplicates."""
        state = cls()
        if first and first.strip():
            state.names.append(first)
        if second and second.strip() and not (first and names_equal(first, second)):
            state.names.append(second)
        return state


@dataclass
class Preferences:
    """User preferences persisted by the preference store."""

    theme: Theme = Theme.DARK
    language: Language = Language.ENGLISH
    show_virtual: bool = False
    show_bluetooth: bool = False
    selection: SelectionState = field(default_factory=SelectionState)

    @classmethod
    def create_default(cls) -> "Preferences":
        """Create preferences with defaults (dark, English, no selection)."""
        return cls()
