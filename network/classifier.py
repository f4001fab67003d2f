"""Adapter classification.

Maps a raw adapter's fields to (type, is_virtual, is_bluetooth) using three
ordered rule tables. Each table is evaluated top to bottom and the first
matching rule decides the outcome.

Order:
    1. BLUETOOTH_RULES (default: not Bluetooth)
    2. VIRTUAL_RULES, with is_bluetooth known (default: not virtual)
    3. TYPE_RULES, with both flags known (default: UNKNOWN)

Classification is pure: identical facts always give identical results.
"""

from dataclasses import dataclass, replace
from typing import Callable, Generic, Sequence, TypeVar

import config
from enums import AdapterType
from models import RawAdapterRecord
from utils.text import normalize_for_match

T = TypeVar("T")


@dataclass(frozen=True)
class ClassificationFacts:
    """Normalized inputs for the rule tables."""

    text: str  # Normalized name, description, labels, service, vendor
    device_id: str  # Normalized PnP device id ("" if unknown)
    if_type: int | None
    reported_virtual: bool | None
    physical_adapter: bool | None
    hardware_interface: bool | None
    source_type: str | None  # Raw adapter-type label
    is_bluetooth: bool = False
    is_virtual: bool = False

    @classmethod
    def from_raw(cls, raw: RawAdapterRecord) -> "ClassificationFacts":
        """Build facts from a (fused) raw record.

        Args:
            raw: Raw adapter record, enrichment already applied

        Returns:
            ClassificationFacts with text normalized for matching.
        """
        source_type = raw.source_type.strip() if raw.source_type else None
        return cls(
            text=normalize_for_match(
                raw.name,
                raw.full_name,
                source_type,
                raw.service_name,
                raw.manufacturer,
                raw.driver_description,
                raw.interface_name,
            ),
            device_id=normalize_for_match(raw.device_id),
            if_type=raw.if_type,
            reported_virtual=raw.reported_virtual,
            physical_adapter=raw.physical_adapter,
            hardware_interface=raw.hardware_interface,
            source_type=source_type or None,
        )


@dataclass(frozen=True)
class Rule(Generic[T]):
    """Named predicate with the outcome it yields when matched.

    The outcome may be a callable computing the value from the facts.
    """

    name: str
    predicate: Callable[[ClassificationFacts], bool]
    outcome: T | Callable[[ClassificationFacts], T]

    def resolve(self, facts: ClassificationFacts) -> T:
        if callable(self.outcome):
            return self.outcome(facts)
        return self.outcome


@dataclass(frozen=True)
class Classification:
    """Classifier result."""

    adapter_type: AdapterType | str
    is_virtual: bool
    is_bluetooth: bool


def first_matching_rule(
    rules: Sequence[Rule[T]], facts: ClassificationFacts
) -> Rule[T] | None:
    """Return the first rule whose predicate holds, or None."""
    for rule in rules:
        if rule.predicate(facts):
            return rule
    return None


def evaluate_rules(rules: Sequence[Rule[T]], facts: ClassificationFacts, default: T) -> T:
    """Evaluate a rule table with short-circuit on first match.

    Args:
        rules: Ordered rule table
        facts: Classification inputs
        default: Result when no rule matches

    Returns:
        Outcome of the first matching rule, or default.
    """
    rule = first_matching_rule(rules, facts)
    if rule is None:
        return default
    return rule.resolve(facts)


# Predicates


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _has_bluetooth_keyword(facts: ClassificationFacts) -> bool:
    return _contains_any(facts.text, config.BLUETOOTH_KEYWORDS)


def _has_bluetooth_device_id(facts: ClassificationFacts) -> bool:
    return facts.device_id.startswith(config.BLUETOOTH_DEVICE_PREFIXES)


def _has_bluetooth_if_type(facts: ClassificationFacts) -> bool:
    return config.IF_TYPE_BLUETOOTH is not None and facts.if_type == config.IF_TYPE_BLUETOOTH


def _reported_virtual(facts: ClassificationFacts) -> bool:
    # Bluetooth is never virtual, even when the source says so
    return facts.reported_virtual is True and not facts.is_bluetooth


def _on_physical_bus(facts: ClassificationFacts) -> bool:
    return facts.device_id.startswith(config.PHYSICAL_BUS_PREFIXES)


def _is_ethernet_if_type(facts: ClassificationFacts) -> bool:
    return facts.if_type == config.IF_TYPE_ETHERNET


def _is_bluetooth(facts: ClassificationFacts) -> bool:
    return facts.is_bluetooth


def _is_virtual_if_type(facts: ClassificationFacts) -> bool:
    return facts.if_type in config.VIRTUAL_IF_TYPES


def _has_virtual_keyword(facts: ClassificationFacts) -> bool:
    return _contains_any(facts.text, config.VIRTUAL_KEYWORDS) or _contains_any(
        facts.device_id, config.VIRTUAL_KEYWORDS
    )


def _hardware_flags_physical(facts: ClassificationFacts) -> bool:
    flags = (facts.hardware_interface, facts.physical_adapter)
    return True in flags and False not in flags


def _hardware_flags_virtual(facts: ClassificationFacts) -> bool:
    flags = (facts.hardware_interface, facts.physical_adapter)
    return False in flags and not facts.is_bluetooth


def _is_wifi(facts: ClassificationFacts) -> bool:
    return facts.if_type == config.IF_TYPE_WIFI or _contains_any(facts.text, config.WIFI_KEYWORDS)


def _is_loopback(facts: ClassificationFacts) -> bool:
    return facts.if_type == config.IF_TYPE_LOOPBACK or _contains_any(
        facts.text, config.LOOPBACK_KEYWORDS
    )


def _is_tunnel(facts: ClassificationFacts) -> bool:
    return facts.if_type == config.IF_TYPE_TUNNEL or _contains_any(
        facts.text, config.TUNNEL_KEYWORDS
    )


def _is_ppp(facts: ClassificationFacts) -> bool:
    return facts.if_type == config.IF_TYPE_PPP


def _is_ethernet(facts: ClassificationFacts) -> bool:
    return _is_ethernet_if_type(facts) or _contains_any(facts.text, config.ETHERNET_KEYWORDS)


def _is_virtual(facts: ClassificationFacts) -> bool:
    return facts.is_virtual


def _has_source_label(facts: ClassificationFacts) -> bool:
    return bool(facts.source_type)


def _source_label(facts: ClassificationFacts) -> AdapterType | str:
    label = facts.source_type or ""
    for member in AdapterType:
        if member.value.casefold() == label.casefold():
            return member
    return label or AdapterType.UNKNOWN


# Rule tables (order is precedence)

BLUETOOTH_RULES: tuple[Rule[bool], ...] = (
    Rule("bluetooth-keyword", _has_bluetooth_keyword, True),
    Rule("bluetooth-device-id", _has_bluetooth_device_id, True),
    Rule("bluetooth-if-type", _has_bluetooth_if_type, True),
)

VIRTUAL_RULES: tuple[Rule[bool], ...] = (
    Rule("reported-virtual", _reported_virtual, True),
    Rule("physical-bus", _on_physical_bus, False),
    Rule("ethernet-if-type", _is_ethernet_if_type, False),
    Rule("bluetooth", _is_bluetooth, False),
    Rule("virtual-if-type", _is_virtual_if_type, True),
    Rule("virtual-keyword", _has_virtual_keyword, True),
    Rule("hardware-flags-physical", _hardware_flags_physical, False),
    Rule("hardware-flags-virtual", _hardware_flags_virtual, True),
)

TYPE_RULES: tuple[Rule[AdapterType | str], ...] = (
    Rule("bluetooth", _is_bluetooth, AdapterType.BLUETOOTH),
    Rule("wifi", _is_wifi, AdapterType.WIFI),
    Rule("loopback", _is_loopback, AdapterType.LOOPBACK),
    Rule("tunnel", _is_tunnel, AdapterType.TUNNEL),
    Rule("ppp", _is_ppp, AdapterType.PPP),
    Rule("ethernet", _is_ethernet, AdapterType.ETHERNET),
    Rule("virtual", _is_virtual, AdapterType.VIRTUAL),
    Rule("source-label", _has_source_label, _source_label),
)


def classify(facts: ClassificationFacts) -> Classification:
    """Classify an adapter from its facts.

    Args:
        facts: Normalized classification inputs

    Returns:
        Classification with type and flags. is_bluetooth implies not
        is_virtual.
    """
    is_bluetooth = evaluate_rules(BLUETOOTH_RULES, facts, False)
    facts = replace(facts, is_bluetooth=is_bluetooth, is_virtual=False)

    is_virtual = evaluate_rules(VIRTUAL_RULES, facts, False)
    facts = replace(facts, is_virtual=is_virtual)

    adapter_type = evaluate_rules(TYPE_RULES, facts, AdapterType.UNKNOWN)
    return Classification(
        adapter_type=adapter_type,
        is_virtual=is_virtual,
        is_bluetooth=is_bluetooth,
    )


def classify_raw(raw: RawAdapterRecord) -> Classification:
    """Classify a raw record (convenience wrapper)."""
    return classify(ClassificationFacts.from_raw(raw))
