"""
Species service: the long-lived entry point.

One ``SpeciesService`` per process owns the GBIF client (and its circuit
breaker), the location cache and the selection policy. Callers hold the
instance and pass it around; nothing here is a module-level global.

    service = SpeciesService()
    service.select_species(34.05, -117.27, "birds")
    # SelectedSpecies(name='House Finch', scientific_name='Haemorhous mexicanus', type='bird')
"""

from __future__ import annotations

import logging
import random

from species_resolver.cascade import EMERGENCY_SOURCE, CascadeController
from species_resolver.clock import Clock, utc_now
from species_resolver.config import Settings, get_settings
from species_resolver.datasources.gbif.client import GBIFClient
from species_resolver.ecoregion import classify
from species_resolver.errors import NoCandidatesError
from species_resolver.models import SpeciesCandidate
from species_resolver.reference.fallbacks import (
    EMERGENCY_SPECIES,
    EMERGENCY_TYPE,
    REGIONAL_FALLBACKS,
)
from species_resolver.reference.taxa import TAXONOMIC_CLASSES, TaxonomicClass, find_taxon
from species_resolver.schemas import (
    BreakerStats,
    CacheEntrySummary,
    CacheStats,
    CandidateSummary,
    ClassSurvey,
    Location,
    LocationSurvey,
    SelectedSpecies,
    ServiceStats,
)
from species_resolver.selection import SelectionPolicy
from species_resolver.store import SpeciesCache

logger = logging.getLogger(__name__)


def emergency_candidate() -> SpeciesCandidate:
    common, scientific = EMERGENCY_SPECIES
    return SpeciesCandidate(
        name=common,
        scientific_name=scientific,
        type=EMERGENCY_TYPE,
        habitat="urban",
        source=EMERGENCY_SOURCE,
    )


class SpeciesService:
    """Resolve and select species for coordinates."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: GBIFClient | None = None,
        cache: SpeciesCache | None = None,
        policy: SelectionPolicy | None = None,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._clock = clock
        self._rng = rng or random.Random()
        self.client = client or GBIFClient.from_settings(self.settings, clock=clock, rng=self._rng)
        if cache is None:
            cache = SpeciesCache(self.settings.cache_max_per_class, clock=clock)
        self.cache = cache
        self.policy = policy or SelectionPolicy(
            cooldown=self.settings.cooldown, clock=clock, rng=self._rng
        )
        self.cascade = CascadeController(
            self.client,
            self.cache,
            narrow_radius_km=self.settings.narrow_radius_km,
            expanded_radius_km=self.settings.expanded_radius_km,
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_species(
        self, lat: float, lon: float, class_hint: str | None = None
    ) -> SelectedSpecies:
        """Pick one displayable species for the coordinate.

        Always returns a result. Unknown class hints fall back to a random
        class. Invalid coordinates raise ``pydantic.ValidationError``.
        """
        location = Location(lat=lat, lon=lon)
        taxon = self.resolve_taxon(class_hint)

        try:
            candidates = self.cascade.resolve(
                location.lat, location.lon, taxon, self.settings.desired_count
            )
            chosen = self.cache.choose(
                location.lat, location.lon, taxon.name, self.policy.select, candidates
            )
        except NoCandidatesError as exc:
            logger.error(
                "No species for %s at (%s, %s), using emergency species: %s",
                taxon.name,
                location.lat,
                location.lon,
                exc,
            )
            return SelectedSpecies.from_candidate(emergency_candidate())

        logger.info(
            "Selected %s (%s) for %s at (%s, %s)",
            chosen.name,
            chosen.source,
            taxon.name,
            location.lat,
            location.lon,
        )
        return SelectedSpecies.from_candidate(chosen)

    def resolve_taxon(self, class_hint: str | None) -> TaxonomicClass:
        taxon = find_taxon(class_hint)
        if taxon is not None:
            return taxon
        chosen = self._rng.choice(TAXONOMIC_CLASSES)
        if class_hint:
            logger.warning("Unknown class %r, picking %s at random", class_hint, chosen.name)
        return chosen

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def resolve(
        self, lat: float, lon: float, class_name: str, count: int | None = None
    ) -> list[CandidateSummary]:
        """Full candidate list for one class, without selecting.

        Raises:
            ValueError: If ``class_name`` is not a known class.
        """
        location = Location(lat=lat, lon=lon)
        taxon = find_taxon(class_name)
        if taxon is None:
            msg = f"unknown taxonomic class: {class_name!r}"
            raise ValueError(msg)
        desired = count or self.settings.desired_count
        try:
            candidates = self.cascade.resolve(location.lat, location.lon, taxon, desired)
        except NoCandidatesError as exc:
            logger.error("No species for %s: %s", taxon.name, exc)
            candidates = [emergency_candidate()]
        return [CandidateSummary.from_candidate(c) for c in candidates]

    def survey(self, lat: float, lon: float, count: int | None = None) -> LocationSurvey:
        """Resolve every class at one point, for diagnostics."""
        location = Location(lat=lat, lon=lon)
        ecoregion = classify(location.lat, location.lon)
        classes = []
        for taxon in TAXONOMIC_CLASSES:
            species = self.resolve(location.lat, location.lon, taxon.name, count)
            classes.append(
                ClassSurvey(
                    type=taxon.name,
                    species=species,
                    count=len(species),
                    source=species[0].source if species else "",
                )
            )
        return LocationSurvey(
            location=location,
            ecoregion=ecoregion.name,
            ecoregion_code=ecoregion.code,
            region_tag=ecoregion.region_tag,
            classes=classes,
            last_upstream_error=self.last_upstream_error,
        )

    @property
    def last_upstream_error(self) -> str | None:
        failure = self.client.last_error
        if failure is None:
            return None
        if failure.status is not None:
            return f"{failure.message} (status {failure.status})"
        return failure.message

    def stats(self) -> ServiceStats:
        breaker = self.client.breaker.snapshot()
        cache = self.cache.stats()
        return ServiceStats(
            breaker=BreakerStats(
                is_open=self.client.breaker.is_open,
                open_until=breaker.open_until,
                consecutive_failures=breaker.consecutive_failures,
                last_open_reason=breaker.last_open_reason,
            ),
            cache=CacheStats(
                entries=cache.entries,
                hits=cache.hits,
                misses=cache.misses,
                evictions=cache.evictions,
                max_per_class=self.cache.max_per_class,
                per_class=cache.per_class,
                details=[CacheEntrySummary.model_validate(d) for d in cache.details],
            ),
            no_repeat_days=self.settings.no_repeat_days,
            classes=[t.name for t in TAXONOMIC_CLASSES],
            regions=sorted(REGIONAL_FALLBACKS),
        )

    def clear_cache(self) -> int:
        return self.cache.clear()
