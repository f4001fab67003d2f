"""Switch decision and cooldown.

The decision maps the current admin states of the selected pair to target
states with exactly one adapter enabled. The cooldown governor rate-limits
successful switches; it is polled on every attempt and runs no timer.
"""

import math
import time
from typing import Callable

import config
from enums import CooldownPhase
from errors import AdapterNotFoundError, CooldownActiveError
from models import AdapterRecord, SwitchPlan
from utils import names_equal

# (first_enabled, second_enabled) -> (enable_first, enable_second)
SWITCH_TABLE: dict[tuple[bool, bool], tuple[bool, bool]] = {
    (True, False): (False, True),
    (False, True): (True, False),
    (True, True): (False, True),
    (False, False): (True, False),
}


def decide_target_state(first_enabled: bool, second_enabled: bool) -> tuple[bool, bool]:
    """Look up target states for the pair.

    Args:
        first_enabled: Primary adapter currently enabled
        second_enabled: Secondary adapter currently enabled

    Returns:
        Tuple of (enable_first, enable_second); exactly one is True.
    """
    return SWITCH_TABLE[(first_enabled, second_enabled)]


def find_adapter(snapshot: list[AdapterRecord], name: str) -> AdapterRecord | None:
    """Find an adapter by name (case-insensitive, first match)."""
    for adapter in snapshot:
        if names_equal(adapter.name, name):
            return adapter
    return None


def plan_switch(snapshot: list[AdapterRecord], first_name: str, second_name: str) -> SwitchPlan:
    """Compute the switch plan from a freshly fetched snapshot.

    Args:
        snapshot: Current adapters (re-fetched right before deciding)
        first_name: Primary selected name
        second_name: Secondary selected name

    Returns:
        SwitchPlan with the snapshot's canonical names.

    Raises:
        AdapterNotFoundError: Either name is missing from the snapshot.
    """
    first = find_adapter(snapshot, first_name)
    if first is None:
        raise AdapterNotFoundError(first_name)

    second = find_adapter(snapshot, second_name)
    if second is None:
        raise AdapterNotFoundError(second_name)

    enable_first, enable_second = decide_target_state(first.admin_enabled, second.admin_enabled)
    return SwitchPlan(
        first=first.name,
        second=second.name,
        enable_first=enable_first,
        enable_second=enable_second,
    )


class CooldownGovernor:
    """Rejects switches for a fixed window after each successful one."""

    def __init__(
        self,
        duration: float = config.SWITCH_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration = duration
        self._clock = clock
        self._next_eligible: float | None = None

    @property
    def phase(self) -> CooldownPhase:
        if self._next_eligible is None or self._clock() >= self._next_eligible:
            return CooldownPhase.ELIGIBLE
        return CooldownPhase.COOLING

    def remaining_seconds(self) -> int:
        """Whole seconds until the next switch is allowed.

        Returns:
            0 when eligible, otherwise ceil(remaining) and at least 1.
        """
        if self._next_eligible is None:
            return 0
        remaining = self._next_eligible - self._clock()
        if remaining <= 0:
            return 0
        return max(1, math.ceil(remaining))

    def check(self) -> None:
        """Raise CooldownActiveError while cooling."""
        remaining = self.remaining_seconds()
        if remaining > 0:
            raise CooldownActiveError(remaining)

    def record_success(self) -> None:
        """Start the cooldown window after a successful switch."""
        self._next_eligible = self._clock() + self.duration
