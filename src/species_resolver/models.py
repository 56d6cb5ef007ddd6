"""Core data records shared by the cascade, cache and selection policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003


@dataclass
class SpeciesCandidate:
    """One displayable species produced by normalization.

    ``last_used_at`` is stamped by the selection policy on the cached list
    (see ``SpeciesCache.choose``).
    """

    name: str
    scientific_name: str
    type: str
    habitat: str
    source: str
    last_used_at: datetime | None = None

    @property
    def from_upstream(self) -> bool:
        return self.source.lower().startswith("gbif")


@dataclass(frozen=True)
class Coordinates:
    """A lat/lon pair as stored on cache entries."""

    lat: float
    lon: float


@dataclass
class CacheEntry:
    """Resolved candidates for one (rounded location, taxonomic class) cluster."""

    cluster_key: str
    species: list[SpeciesCandidate]
    created_at: datetime
    location: Coordinates
    seeded_from_upstream: bool = False
    hits: int = field(default=0, compare=False)
