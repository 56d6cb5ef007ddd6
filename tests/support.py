"""Test doubles shared across suites."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from species_resolver.models import SpeciesCandidate


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 6, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_candidate(name: str, source: str = "gbif-50km", **kwargs: object) -> SpeciesCandidate:
    values: dict[str, object] = {
        "name": name,
        "scientific_name": "",
        "type": "bird",
        "habitat": "woodland",
        "source": source,
    }
    values.update(kwargs)
    return SpeciesCandidate(**values)  # type: ignore[arg-type]
