"""Turn GBIF records into de-duplicated species candidates."""

from __future__ import annotations

from collections.abc import Iterable

from species_resolver.datasources.gbif.models import GBIFRecord, VernacularName
from species_resolver.models import SpeciesCandidate
from species_resolver.names import build_candidate, is_valid_common_name, sanitize
from species_resolver.reference.taxa import TaxonomicClass


def _first_valid(names: Iterable[str | None]) -> str:
    for raw in names:
        cleaned = sanitize(raw)
        if is_valid_common_name(cleaned):
            return cleaned
    return ""


def best_vernacular_from(names: list[VernacularName]) -> str:
    """English-tagged first, then any ``en*`` tag, then any valid name."""
    return (
        _first_valid(n.vernacular_name for n in names if n.is_english)
        or _first_valid(n.vernacular_name for n in names if n.is_english_like)
        or _first_valid(n.vernacular_name for n in names)
    )


def best_vernacular(record: GBIFRecord) -> str:
    """Best cleaned common name on a record, or ``""``."""
    return best_vernacular_from(record.vernacular_names) or _first_valid(
        (record.vernacular_name, record.common_name)
    )


def records_to_candidates(
    records: Iterable[GBIFRecord],
    taxon: TaxonomicClass,
    source: str,
    vernaculars: dict[int, str] | None = None,
) -> list[SpeciesCandidate]:
    """Normalize records and drop duplicates by display name.

    Args:
        records: Parsed upstream records.
        taxon: Class the query was scoped to; sets ``type`` and habitat defaults.
        source: Provenance tag, e.g. ``"gbif-50km"``.
        vernaculars: Extra common names looked up by record key.
    """
    vernaculars = vernaculars or {}
    seen: dict[str, SpeciesCandidate] = {}
    for record in records:
        if not record.is_species_level:
            continue
        common = best_vernacular(record)
        if not common and record.lookup_key is not None:
            common = vernaculars.get(record.lookup_key, "")
        candidate = build_candidate(common, record.best_scientific, taxon, source)
        if candidate is None:
            continue
        seen.setdefault(candidate.name.casefold(), candidate)
    return list(seen.values())
