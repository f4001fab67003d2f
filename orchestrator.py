"""Orchestration of adapter discovery and switching.

AdapterService combines the data sources into one snapshot and exposes the
adapter control operation. SwitchController holds the user's selection and
preferences and runs discovery and switch operations, at most one at a
time, on a single worker thread.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from typing import Callable, Iterator, Sequence, TypeVar

import config
from enums import Language, Theme
from errors import ControllerBusyError, SelectionIncompleteError
from logging_config import get_logger
from models import AdapterRecord, EnrichmentFields, Preferences, SelectionState, SwitchPlan
from network import (
    AdapterSource,
    default_sources,
    enumerate_first_available,
    fuse_adapters,
    load_adapter_metadata,
    load_ipv4_by_index,
    set_adapter_state,
)
from preferences import PreferenceStore
from switching import CooldownGovernor, plan_switch
from utils import command_exists, sanitize_for_log

logger = get_logger(__name__)

T = TypeVar("T")


def check_dependencies() -> bool:
    """Check that a PowerShell host is available.

    Returns:
        True if any configured host is on PATH, False otherwise.

    Logs:
        ERROR with install hint when none is found.
    """
    if any(command_exists(host) for host in config.POWERSHELL_HOSTS):
        return True

    logger.error(
        "Error: Missing required command: one of %s",
        ", ".join(config.POWERSHELL_HOSTS),
    )
    logger.error("  Install: https://aka.ms/powershell")
    return False


def filter_visible(
    adapters: list[AdapterRecord],
    show_virtual: bool,
    show_bluetooth: bool,
) -> list[AdapterRecord]:
    """Hide virtual and/or Bluetooth adapters.

    Args:
        adapters: Full snapshot
        show_virtual: Keep virtual adapters
        show_bluetooth: Keep Bluetooth adapters

    Returns:
        Visible adapters in snapshot order.
    """
    return [
        adapter for adapter in adapters
        if (show_virtual or not adapter.is_virtual)
        and (show_bluetooth or not adapter.is_bluetooth)
    ]


class AdapterService:
    """Adapter snapshot and state changes."""

    def __init__(
        self,
        sources: Sequence[AdapterSource] | None = None,
        metadata_loader: Callable[[], dict[str, EnrichmentFields]] = load_adapter_metadata,
        address_loader: Callable[[], dict[int, str]] = load_ipv4_by_index,
        state_setter: Callable[[str, bool], None] = set_adapter_state,
    ) -> None:
        self.sources = list(sources) if sources is not None else default_sources()
        self._metadata_loader = metadata_loader
        self._address_loader = address_loader
        self._state_setter = state_setter

    def get_adapters(self) -> list[AdapterRecord]:
        """Fetch a fresh adapter snapshot.

        Process:
            1. Enumerate sources in priority order (first non-empty wins)
            2. Load metadata and IPv4 maps
            3. Fuse, classify, deduplicate, sort

        Returns:
            Sorted snapshot, or [] when no source returned data.
        """
        raw_records = enumerate_first_available(self.sources)
        if not raw_records:
            return []

        metadata = self._metadata_loader()
        ipv4_by_index = self._address_loader()
        logger.debug(
            "Fusing %d records with %d metadata entries and %d addresses",
            len(raw_records),
            len(metadata),
            len(ipv4_by_index),
        )
        return fuse_adapters(raw_records, metadata, ipv4_by_index)

    def set_adapter_state(self, name: str, enable: bool) -> None:
        """Enable or disable one adapter (raises on failure)."""
        self._state_setter(name, enable)


class SwitchController:
    """Selection, preferences and the exclusive switch.

    Only one refresh or switch may run at a time. The busy flag is checked
    and set by the coordinating thread before work is handed to the worker,
    and cleared when the work finishes.
    """

    def __init__(
        self,
        service: AdapterService | None = None,
        store: PreferenceStore | None = None,
        governor: CooldownGovernor | None = None,
    ) -> None:
        self.service = service if service is not None else AdapterService()
        self.store = store if store is not None else PreferenceStore()
        self.governor = governor if governor is not None else CooldownGovernor()
        self.preferences: Preferences = self.store.load()
        self.all_adapters: list[AdapterRecord] = []
        self.adapters: list[AdapterRecord] = []
        self.busy = False
        self._executor: ThreadPoolExecutor | None = None

    @property
    def selection(self) -> SelectionState:
        return self.preferences.selection

    # Persistence

    def persist(self) -> None:
        """Save preferences to every location (best effort)."""
        written = self.store.save(self.preferences)
        logger.debug("Settings written to %d of %d locations", written, len(self.store.targets))

    # Busy guard and worker

    @contextmanager
    def _busy_guard(self) -> Iterator[None]:
        if self.busy:
            raise ControllerBusyError()
        self.busy = True
        try:
            yield
        finally:
            self.busy = False

    def _clear_busy(self, _future: Future) -> None:
        self.busy = False

    def _submit(self, operation: Callable[[], T]) -> "Future[T]":
        if self.busy:
            raise ControllerBusyError()
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="netswitch")
        self.busy = True
        future = self._executor.submit(operation)
        future.add_done_callback(self._clear_busy)
        return future

    def shutdown(self) -> None:
        """Wait for running work and release the worker thread."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # Discovery

    def _apply_filters(self) -> None:
        self.adapters = filter_visible(
            self.all_adapters,
            self.preferences.show_virtual,
            self.preferences.show_bluetooth,
        )

    def _prune_selection(self) -> None:
        changed = self.selection.prune([adapter.name for adapter in self.all_adapters])
        changed = self.selection.prune([adapter.name for adapter in self.adapters]) or changed
        if changed:
            logger.info("Selection no longer available, now: %s", self.selection.names)
            self.persist()

    def _refresh(self) -> list[AdapterRecord]:
        self.all_adapters = self.service.get_adapters()
        self._apply_filters()
        if self.all_adapters:
            self._prune_selection()
        logger.info(
            "Found %d adapters (%d shown, %d virtual, %d bluetooth)",
            len(self.all_adapters),
            len(self.adapters),
            sum(1 for a in self.all_adapters if a.is_virtual),
            sum(1 for a in self.all_adapters if a.is_bluetooth),
        )
        return self.adapters

    def refresh(self) -> list[AdapterRecord]:
        """Fetch a fresh snapshot, filter it and prune the selection.

        An empty snapshot means "no data" and leaves the selection intact.

        Returns:
            Visible adapters.

        Raises:
            ControllerBusyError: Another operation is running.
        """
        with self._busy_guard():
            return self._refresh()

    def submit_refresh(self) -> "Future[list[AdapterRecord]]":
        """Run refresh() on the worker thread."""
        return self._submit(self._refresh)

    # Selection and preferences

    def toggle_selection(self, name: str) -> SelectionState:
        """Toggle an adapter in the selection and persist."""
        self.selection.toggle(name)
        logger.info("Selected: %s", [sanitize_for_log(n) for n in self.selection.names])
        self.persist()
        return self.selection

    def set_theme(self, theme: Theme) -> None:
        self.preferences.theme = theme
        self.persist()

    def toggle_theme(self) -> Theme:
        """Switch between dark and light theme."""
        self.set_theme(Theme.LIGHT if self.preferences.theme == Theme.DARK else Theme.DARK)
        return self.preferences.theme

    def set_language(self, language: Language) -> None:
        self.preferences.language = language
        self.persist()

    def set_show_virtual(self, show: bool) -> None:
        self.preferences.show_virtual = show
        self._apply_filters()
        self.persist()

    def set_show_bluetooth(self, show: bool) -> None:
        self.preferences.show_bluetooth = show
        self._apply_filters()
        self.persist()

    # Switching

    def _check_switch_allowed(self) -> tuple[str, str]:
        self.governor.check()
        if not self.selection.is_complete:
            raise SelectionIncompleteError(len(self.selection.names))
        first, second = self.selection.names
        return first, second

    def _switch(self, first: str, second: str) -> SwitchPlan:
        logger.info("Switching: '%s' <-> '%s'", sanitize_for_log(first), sanitize_for_log(second))

        # Decide on fresh state, never on the cached snapshot
        plan = plan_switch(self.service.get_adapters(), first, second)
        logger.info(
            "Apply: %s=%s, %s=%s",
            sanitize_for_log(plan.first),
            "Enable" if plan.enable_first else "Disable",
            sanitize_for_log(plan.second),
            "Enable" if plan.enable_second else "Disable",
        )

        self.service.set_adapter_state(plan.first, plan.enable_first)
        self.service.set_adapter_state(plan.second, plan.enable_second)
        self.governor.record_success()
        logger.info("Switch done, next switch available in %g s", self.governor.duration)

        self._refresh()
        return plan

    def switch(self) -> SwitchPlan:
        """Enable one selected adapter and disable the other.

        Returns:
            The applied SwitchPlan.

        Raises:
            CooldownActiveError: Cooldown window still open.
            SelectionIncompleteError: Fewer than two adapters selected.
            ControllerBusyError: Another operation is running.
            AdapterNotFoundError: A selected adapter is gone.
            AdapterControlError: The OS rejected a state change.
        """
        first, second = self._check_switch_allowed()
        with self._busy_guard():
            return self._switch(first, second)

    def submit_switch(self) -> "Future[SwitchPlan]":
        """Run switch() on the worker thread.

        Cooldown and selection are checked before submitting, so those
        errors raise immediately; the rest surface through the future.
        """
        first, second = self._check_switch_allowed()
        return self._submit(lambda: self._switch(first, second))
