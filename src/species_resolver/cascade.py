"""
Tiered species resolution.

Tiers, each tried only while fewer than ``desired_count`` candidates are
collected:

    1. cache             location cluster hit, returned as-is
    2. GBIF narrow       occurrence search within 50 km
    3. GBIF expanded     200 km, merged with the narrow results
    4. regional table    static list for the point's region, if any
    5. global table      static list per class, never empty

Candidates are de-duplicated across tiers by case-folded name, and the
merged list is written to the cache exactly once per miss.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from species_resolver.ecoregion import Ecoregion, classify
from species_resolver.errors import NoCandidatesError
from species_resolver.names import build_candidate
from species_resolver.reference.fallbacks import GLOBAL_FALLBACKS, REGIONAL_FALLBACKS, SpeciesRow

if TYPE_CHECKING:
    from species_resolver.datasources.gbif.client import GBIFClient
    from species_resolver.models import SpeciesCandidate
    from species_resolver.reference.taxa import TaxonomicClass
    from species_resolver.store import SpeciesCache

logger = logging.getLogger(__name__)

GLOBAL_SOURCE = "global-fallback"
EMERGENCY_SOURCE = "emergency-fallback"


def regional_source(region_tag: str) -> str:
    return f"regional-{region_tag}"


def rows_to_candidates(
    rows: Iterable[SpeciesRow], taxon: TaxonomicClass, source: str
) -> list[SpeciesCandidate]:
    """Normalize static ``(common, binomial)`` rows like upstream records."""
    candidates = []
    for common, scientific in rows:
        candidate = build_candidate(common, scientific, taxon, source)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


class CascadeController:
    """Resolve a candidate list for (location, class) using the tiers above."""

    def __init__(
        self,
        client: GBIFClient,
        cache: SpeciesCache,
        *,
        narrow_radius_km: float = 50.0,
        expanded_radius_km: float = 200.0,
        regional_tables: Mapping[str, Mapping[str, tuple[SpeciesRow, ...]]] = REGIONAL_FALLBACKS,
        global_tables: Mapping[str, tuple[SpeciesRow, ...]] = GLOBAL_FALLBACKS,
        classifier: Callable[[float, float], Ecoregion] = classify,
    ) -> None:
        self.client = client
        self.cache = cache
        self.narrow_radius_km = narrow_radius_km
        self.expanded_radius_km = expanded_radius_km
        self.regional_tables = regional_tables
        self.global_tables = global_tables
        self.classifier = classifier

    def resolve(
        self,
        lat: float,
        lon: float,
        taxon: TaxonomicClass,
        desired_count: int = 5,
    ) -> list[SpeciesCandidate]:
        """Candidates for the point, never empty.

        Raises:
            NoCandidatesError: If the global table has nothing for ``taxon``.
        """
        cached = self.cache.get(lat, lon, taxon.name)
        if cached is not None:
            return cached.species

        ecoregion = self.classifier(lat, lon)
        logger.debug(
            "Resolving %s at (%s, %s), ecoregion %s (%s)",
            taxon.name,
            lat,
            lon,
            ecoregion.name,
            ecoregion.code,
        )

        collected: dict[str, SpeciesCandidate] = {}

        def add(candidates: Iterable[SpeciesCandidate]) -> None:
            for candidate in candidates:
                collected.setdefault(candidate.name.casefold(), candidate)

        add(self.client.fetch(lat, lon, taxon, self.narrow_radius_km))
        if len(collected) < desired_count and self.expanded_radius_km > self.narrow_radius_km:
            logger.info(
                "Only %d %s within %gkm, expanding to %gkm",
                len(collected),
                taxon.name,
                self.narrow_radius_km,
                self.expanded_radius_km,
            )
            add(self.client.fetch(lat, lon, taxon, self.expanded_radius_km))

        if len(collected) < desired_count:
            add(self._regional(ecoregion.region_tag, taxon))

        if len(collected) < desired_count:
            global_rows = self.global_tables.get(taxon.name, ())
            if not collected and not global_rows:
                msg = f"no fallback species configured for {taxon.name}"
                raise NoCandidatesError(msg)
            logger.warning(
                "Using global fallback for %s at (%s, %s): %d candidates so far",
                taxon.name,
                lat,
                lon,
                len(collected),
            )
            add(rows_to_candidates(global_rows, taxon, GLOBAL_SOURCE))

        if not collected:
            msg = f"no displayable species for {taxon.name}"
            raise NoCandidatesError(msg)

        species = list(collected.values())
        self.cache.put(lat, lon, taxon.name, species)
        return species

    def _regional(self, region_tag: str, taxon: TaxonomicClass) -> list[SpeciesCandidate]:
        if not region_tag:
            return []
        rows = self.regional_tables.get(region_tag, {}).get(taxon.name, ())
        if rows:
            logger.info("Adding %s fallback species for %s", region_tag, taxon.name)
        return rows_to_candidates(rows, taxon, regional_source(region_tag))
