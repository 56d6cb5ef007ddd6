"""
Public result models.

Pydantic models returned by ``SpeciesService``. Internal records live in
``models.py``; these define the canonical shape handed to callers.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from species_resolver.models import SpeciesCandidate

# =============================================================================
# Requests
# =============================================================================


class Location(BaseModel):
    """A validated coordinate."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


# =============================================================================
# Results
# =============================================================================


class SelectedSpecies(BaseModel):
    """The one species chosen for a coordinate."""

    name: str
    scientific_name: str = ""
    type: str = Field(..., description="Singular class name, e.g. 'bird'")

    @classmethod
    def from_candidate(cls, candidate: SpeciesCandidate) -> SelectedSpecies:
        return cls(
            name=candidate.name,
            scientific_name=candidate.scientific_name,
            type=candidate.type,
        )


class CandidateSummary(BaseModel):
    """Candidate as listed by ``resolve`` and ``survey``."""

    name: str
    scientific_name: str = ""
    type: str
    habitat: str
    source: str
    last_used_at: datetime | None = None

    @classmethod
    def from_candidate(cls, candidate: SpeciesCandidate) -> CandidateSummary:
        return cls(
            name=candidate.name,
            scientific_name=candidate.scientific_name,
            type=candidate.type,
            habitat=candidate.habitat,
            source=candidate.source,
            last_used_at=candidate.last_used_at,
        )


class ClassSurvey(BaseModel):
    """Resolution outcome for one taxonomic class at a location."""

    type: str
    species: list[CandidateSummary] = Field(default_factory=list)
    count: int = 0
    source: str = Field("", description="Source tag of the first candidate")


class LocationSurvey(BaseModel):
    """Every class resolved at one point, plus upstream diagnostics."""

    location: Location
    ecoregion: str
    ecoregion_code: str
    region_tag: str = ""
    classes: list[ClassSurvey] = Field(default_factory=list)
    last_upstream_error: str | None = None


# =============================================================================
# Diagnostics
# =============================================================================


class BreakerStats(BaseModel):
    is_open: bool
    open_until: datetime | None = None
    consecutive_failures: int = 0
    last_open_reason: str | None = None


class CacheEntrySummary(BaseModel):
    key: str
    count: int
    seeded_from_upstream: bool
    created_at: datetime
    hits: int = 0


class CacheStats(BaseModel):
    entries: int
    hits: int
    misses: int
    evictions: int
    max_per_class: int
    per_class: dict[str, int] = Field(default_factory=dict)
    details: list[CacheEntrySummary] = Field(default_factory=list)


class ServiceStats(BaseModel):
    """Snapshot of the long-lived service state."""

    breaker: BreakerStats
    cache: CacheStats
    no_repeat_days: float
    classes: list[str]
    regions: list[str]
