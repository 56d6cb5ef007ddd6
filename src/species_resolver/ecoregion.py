"""Ecoregion classifier.

Maps a coordinate to a named bio-geographic region. The result picks the
regional fallback table and is logged for context; it is never treated as
proof that a species lives there.
"""

from __future__ import annotations

from dataclasses import dataclass

from species_resolver.reference.ecoregions import ECOREGION_RULES, REGION_BOXES


@dataclass(frozen=True)
class Ecoregion:
    """Classifier output."""

    name: str
    code: str
    region_tag: str = ""
    state: str = ""

    @property
    def is_unknown(self) -> bool:
        return self.code == UNKNOWN.code


UNKNOWN = Ecoregion(name="Unknown", code="00")


def region_tag_for(lat: float, lon: float) -> str:
    """Regional fallback key for a coordinate, or ``""`` outside all regions."""
    for tag, bbox in REGION_BOXES:
        if bbox.contains(lat, lon):
            return tag
    return ""


def classify(lat: float, lon: float) -> Ecoregion:
    """Return the first ecoregion whose box contains the point."""
    tag = region_tag_for(lat, lon)
    for rule in ECOREGION_RULES:
        if rule.bbox.contains(lat, lon):
            return Ecoregion(name=rule.name, code=rule.code, region_tag=tag, state=rule.state)
    return Ecoregion(name=UNKNOWN.name, code=UNKNOWN.code, region_tag=tag)
