"""Fusion of raw adapter records into the canonical snapshot.

Pure functions: no I/O, deterministic for identical input.
"""

from dataclasses import replace

from logging_config import get_logger
from models import AdapterRecord, EnrichmentFields, RawAdapterRecord
from network.classifier import classify_raw
from network.enrichment import lookup_metadata
from utils import name_key, sanitize_for_log

logger = get_logger(__name__)


def enrich_record(raw: RawAdapterRecord, metadata: EnrichmentFields | None) -> RawAdapterRecord:
    """Fill fields the provider left unknown from the metadata entry.

    Provider values always win; metadata only replaces None.

    Args:
        raw: Provider record
        metadata: Metadata for the same connection name, if any

    Returns:
        New RawAdapterRecord with missing fields resolved.
    """
    if metadata is None:
        return raw

    return replace(
        raw,
        full_name=raw.full_name or metadata.full_name,
        source_type=raw.source_type or metadata.source_type,
        physical_adapter=(
            raw.physical_adapter if raw.physical_adapter is not None
            else metadata.physical_adapter
        ),
        device_id=raw.device_id or metadata.device_id,
        service_name=raw.service_name or metadata.service_name,
        manufacturer=raw.manufacturer or metadata.manufacturer,
    )


def build_adapter_record(raw: RawAdapterRecord, ipv4: str | None) -> AdapterRecord:
    """Classify an enriched raw record and build the AdapterRecord.

    Unknown admin state counts as enabled; unknown link as disconnected.

    Args:
        raw: Enriched raw record
        ipv4: Resolved IPv4 address or None

    Returns:
        AdapterRecord.
    """
    classification = classify_raw(raw)
    return AdapterRecord(
        name=raw.name,
        full_name=raw.full_name or raw.name,
        adapter_type=classification.adapter_type,
        admin_enabled=raw.admin_enabled is not False,
        connected=raw.connected is True,
        ipv4=ipv4,
        is_virtual=classification.is_virtual,
        is_bluetooth=classification.is_bluetooth,
    )


def deduplicate_and_sort(adapters: list[AdapterRecord]) -> list[AdapterRecord]:
    """Keep the first record per name, then sort by name (case-insensitive).

    Args:
        adapters: Records in provider order

    Returns:
        Deduplicated, sorted list.
    """
    seen: dict[str, AdapterRecord] = {}
    for adapter in adapters:
        key = name_key(adapter.name)
        if key in seen:
            logger.debug("Dropping duplicate adapter %s", sanitize_for_log(adapter.name))
            continue
        seen[key] = adapter

    # Ties on the folded key fall back to the exact name for a total order
    return sorted(seen.values(), key=lambda a: (name_key(a.name), a.name))


def fuse_adapters(
    raw_records: list[RawAdapterRecord],
    metadata: dict[str, EnrichmentFields],
    ipv4_by_index: dict[int, str],
) -> list[AdapterRecord]:
    """Fuse provider records with metadata and addresses.

    Process:
        1. Fill missing fields from metadata (by connection name)
        2. Resolve IPv4 by interface index
        3. Classify and build AdapterRecord
        4. Deduplicate (first wins) and sort by name

    Args:
        raw_records: Records from the chosen provider
        metadata: Metadata map keyed by case-folded name
        ipv4_by_index: IPv4 map keyed by interface index

    Returns:
        Canonical adapter snapshot.
    """
    adapters = []
    for raw in raw_records:
        enriched = enrich_record(raw, lookup_metadata(metadata, raw.name))
        ipv4 = ipv4_by_index.get(enriched.index) if enriched.index is not None else None
        adapter = build_adapter_record(enriched, ipv4)
        logger.debug(
            "[%s] Type: %s, virtual=%s, bluetooth=%s",
            sanitize_for_log(adapter.name),
            sanitize_for_log(adapter.type_label),
            adapter.is_virtual,
            adapter.is_bluetooth,
        )
        adapters.append(adapter)

    return deduplicate_and_sort(adapters)
