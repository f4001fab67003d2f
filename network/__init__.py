"""Network adapter modules for netswitch.

Provides adapter enumeration, metadata and address lookups, fusion,
classification and adapter control.
"""

from .classifier import (
    BLUETOOTH_RULES,
    TYPE_RULES,
    VIRTUAL_RULES,
    Classification,
    ClassificationFacts,
    Rule,
    classify,
    classify_raw,
    evaluate_rules,
)
from .control import set_adapter_state
from .enrichment import load_adapter_metadata, load_ipv4_by_index
from .fusion import fuse_adapters
from .providers import (
    AdapterSource,
    PowerShellAdapterSource,
    WmiAdapterSource,
    default_sources,
    enumerate_first_available,
)

__all__ = [
    # Sources
    "AdapterSource",
    "PowerShellAdapterSource",
    "WmiAdapterSource",
    "default_sources",
    "enumerate_first_available",
    # Enrichment
    "load_adapter_metadata",
    "load_ipv4_by_index",
    # Fusion
    "fuse_adapters",
    # Classification
    "Rule",
    "Classification",
    "ClassificationFacts",
    "BLUETOOTH_RULES",
    "VIRTUAL_RULES",
    "TYPE_RULES",
    "classify",
    "classify_raw",
    "evaluate_rules",
    # Control
    "set_adapter_state",
]
