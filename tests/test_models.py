"""Tests for models.py and enums.py.

Tests selection semantics and the record helpers.
"""

import pytest

from enums import AdapterType, Language, Theme
from models import MAX_SELECTED, AdapterRecord, Preferences, SelectionState


class TestSelectionState:
    """Tests for SelectionState class."""

    def test_empty(self) -> None:
        """Test empty selection."""
        state = SelectionState()
        assert state.primary is None
        assert state.secondary is None
        assert state.is_complete is False

    def test_toggle_selects_in_order(self) -> None:
        """Test first selection is primary, second is secondary."""
        state = SelectionState()
        state.toggle("Ethernet")
        state.toggle("Wi-Fi")
        assert state.primary == "Ethernet"
        assert state.secondary == "Wi-Fi"
        assert state.is_complete is True

    def test_third_selection_evicts_oldest(self) -> None:
        """Test selecting a third adapter drops the primary."""
        state = SelectionState(["Ethernet", "Wi-Fi"])
        state.toggle("Ethernet 2")
        assert state.names == ["Wi-Fi", "Ethernet 2"]
        assert len(state.names) == MAX_SELECTED

    def test_toggle_deselects_case_insensitive(self) -> None:
        """Test selecting a selected adapter (any case) deselects it."""
        state = SelectionState(["Ethernet", "Wi-Fi"])
        state.toggle("ETHERNET")
        assert state.names == ["Wi-Fi"]

    def test_deselect_primary_promotes_secondary(self) -> None:
        """Test removing the primary makes the secondary primary."""
        state = SelectionState(["Ethernet", "Wi-Fi"])
        state.toggle("Ethernet")
        assert state.primary == "Wi-Fi"
        assert state.secondary is None

    def test_contains(self) -> None:
        """Test membership ignores case."""
        state = SelectionState(["Wi-Fi"])
        assert state.contains("wi-fi")
        assert not state.contains("Ethernet")

    def test_prune(self) -> None:
        """Test names missing from the snapshot are dropped."""
        state = SelectionState(["Ethernet", "Wi-Fi"])
        assert state.prune(["wi-fi", "Bluetooth Network Connection"]) is True
        assert state.names == ["Wi-Fi"]

    def test_prune_unchanged(self) -> None:
        """Test prune reports no change when all names exist."""
        state = SelectionState(["Ethernet"])
        assert state.prune(["Ethernet", "Wi-Fi"]) is False
        assert state.names == ["Ethernet"]

    @pytest.mark.parametrize(
        "first,second,expected",
        [
            ("Ethernet", "Wi-Fi", ["Ethernet", "Wi-Fi"]),
            ("Ethernet", "ethernet", ["Ethernet"]),
            (None, "Wi-Fi", ["Wi-Fi"]),
            ("", "", []),
            ("Ethernet", None, ["Ethernet"]),
        ],
    )
    def test_from_pair(self, first, second, expected) -> None:
        """Test building from stored names."""
        assert SelectionState.from_pair(first, second).names == expected


class TestAdapterRecord:
    """Tests for AdapterRecord properties."""

    def test_status_text(self, make_adapter) -> None:
        """Test admin state text."""
        assert make_adapter("Ethernet").status_text == "Enabled"
        assert make_adapter("Ethernet", admin_enabled=False).status_text == "Disabled"

    def test_type_label_enum(self, make_adapter) -> None:
        """Test enum types show their value."""
        assert make_adapter("Wi-Fi", adapter_type=AdapterType.WIFI).type_label == "Wi-Fi"

    def test_type_label_raw(self, make_adapter) -> None:
        """Test raw source labels pass through."""
        assert make_adapter("X", adapter_type="Token Ring 802.5").type_label == "Token Ring 802.5"

    def test_frozen(self, make_adapter) -> None:
        """Test records are immutable."""
        adapter = make_adapter("Ethernet")
        with pytest.raises(AttributeError):
            adapter.name = "Other"  # type: ignore[misc]

    def test_equality(self) -> None:
        """Test value equality."""
        values = dict(
            name="Ethernet",
            full_name="Realtek",
            adapter_type=AdapterType.ETHERNET,
            admin_enabled=True,
            connected=True,
            ipv4=None,
            is_virtual=False,
            is_bluetooth=False,
        )
        assert AdapterRecord(**values) == AdapterRecord(**values)


class TestPreferences:
    """Tests for Preferences defaults."""

    def test_defaults(self) -> None:
        """Test dark theme, English, filters off, no selection."""
        prefs = Preferences.create_default()
        assert prefs.theme == Theme.DARK
        assert prefs.language == Language.ENGLISH
        assert prefs.show_virtual is False
        assert prefs.show_bluetooth is False
        assert prefs.selection.names == []

    def test_defaults_not_shared(self) -> None:
        """Test each instance owns its selection."""
        first = Preferences.create_default()
        second = Preferences.create_default()
        first.selection.toggle("Ethernet")
        assert second.selection.names == []


class TestLanguage:
    """Tests for Language.parse."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("German", Language.GERMAN),
            ("german", Language.GERMAN),
            (" Russian ", Language.RUSSIAN),
            ("CHINESE", Language.CHINESE),
            ("Klingon", Language.ENGLISH),
            (None, Language.ENGLISH),
            (42, Language.ENGLISH),
        ],
    )
    def test_parse(self, value, expected) -> None:
        """Test case-insensitive parse with English fallback."""
        assert Language.parse(value) == expected

    def test_closed_set(self) -> None:
        """Test the supported languages."""
        assert [lang.value for lang in Language] == [
            "English",
            "Russian",
            "French",
            "German",
            "Chinese",
            "Polish",
            "Japanese",
        ]
