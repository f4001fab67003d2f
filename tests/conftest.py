"""Pytest configuration and shared fixtures.

Provides common test fixtures and configuration for the test suite.
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add parent directory to path so imports work
# This allows: from enums import ... to find /project/enums.py
sys.path.insert(0, str(Path(__file__).parent.parent))

from enums import AdapterType
from logging_config import setup_logging
from models import AdapterRecord
from preferences import PreferenceStore
from utils import names_equal


# Configure logging once for entire test session
@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> Generator[None, None, None]:
    """Configure logging for all tests (plain console handler, WARNING+)."""
    setup_logging(verbose=False, use_colors=False)
    yield


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAdapterService:
    """In-memory adapter service recording state changes."""

    def __init__(self, adapters: list[AdapterRecord]) -> None:
        self.adapters = list(adapters)
        self.calls: list[tuple[str, bool]] = []
        self.fetches = 0

    def get_adapters(self) -> list[AdapterRecord]:
        self.fetches += 1
        return list(self.adapters)

    def set_adapter_state(self, name: str, enable: bool) -> None:
        self.calls.append((name, enable))
        self.adapters = [
            replace(adapter, admin_enabled=enable) if names_equal(adapter.name, name) else adapter
            for adapter in self.adapters
        ]


def build_adapter(name: str, **overrides) -> AdapterRecord:
    """Create an AdapterRecord with sensible defaults."""
    values = {
        "name": name,
        "full_name": f"{name} Controller",
        "adapter_type": AdapterType.ETHERNET,
        "admin_enabled": True,
        "connected": True,
        "ipv4": None,
        "is_virtual": False,
        "is_bluetooth": False,
    }
    values.update(overrides)
    return AdapterRecord(**values)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_adapter() -> Callable[..., AdapterRecord]:
    return build_adapter


@pytest.fixture
def sample_adapters() -> list[AdapterRecord]:
    """Typical laptop snapshot, sorted by name."""
    return [
        build_adapter(
            "Bluetooth Network Connection",
            full_name="Bluetooth Device (Personal Area Network)",
            adapter_type=AdapterType.BLUETOOTH,
            connected=False,
            is_bluetooth=True,
        ),
        build_adapter(
            "Ethernet",
            full_name="Realtek PCIe GbE Family Controller",
            ipv4="192.168.1.20",
        ),
        build_adapter(
            "vEthernet (Default Switch)",
            full_name="Hyper-V Virtual Ethernet Adapter",
            ipv4="172.17.0.1",
            is_virtual=True,
        ),
        build_adapter(
            "Wi-Fi",
            full_name="Intel(R) Wi-Fi 6 AX201 160MHz",
            adapter_type=AdapterType.WIFI,
            ipv4="10.0.0.15",
        ),
    ]


@pytest.fixture
def fake_service(sample_adapters: list[AdapterRecord]) -> FakeAdapterService:
    return FakeAdapterService(sample_adapters)


@pytest.fixture
def preference_paths(tmp_path: Path) -> list[Path]:
    """Three candidate locations: machine, temp, local."""
    return [
        tmp_path / "machine" / "NetSwitch" / "settings.json",
        tmp_path / "temp" / "NetSwitch" / "settings.json",
        tmp_path / "local" / "NetSwitch" / "settings.json",
    ]


@pytest.fixture
def preference_store(preference_paths: list[Path]) -> PreferenceStore:
    return PreferenceStore(preference_paths)
