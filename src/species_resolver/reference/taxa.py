"""Taxonomic classes the resolver can be asked for.

Keys are GBIF backbone class keys, passed as ``taxonKey`` to occurrence
search. Insects are deliberately not offered.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaxonomicClass:
    """A coarse animal group and its upstream taxon key."""

    name: str
    upstream_key: int
    display_name: str

    @property
    def singular(self) -> str:
        return singularize(self.name)


BIRDS = TaxonomicClass("birds", 212, "Birds")
MAMMALS = TaxonomicClass("mammals", 359, "Mammals")
FISH = TaxonomicClass("fish", 204, "Fish")
REPTILES = TaxonomicClass("reptiles", 358, "Reptiles")
AMPHIBIANS = TaxonomicClass("amphibians", 131, "Amphibians")

TAXONOMIC_CLASSES: tuple[TaxonomicClass, ...] = (BIRDS, MAMMALS, FISH, REPTILES, AMPHIBIANS)

# Default habitat per class when the name gives no hint
_DEFAULT_HABITAT = {
    "birds": "woodland",
    "mammals": "terrestrial",
    "fish": "freshwater",
    "reptiles": "terrestrial",
    "amphibians": "wetland",
}

_HABITAT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("aquatic", ("fish", "salmon", "trout", "frog", "turtle", "duck")),
    ("forest", ("wood", "tree", "forest")),
    ("urban", ("house", "city", "urban")),
)


def singularize(class_name: str) -> str:
    """``birds`` → ``bird``; ``fish`` stays ``fish``."""
    lower = class_name.lower()
    if lower == "fish":
        return lower
    if lower.endswith("s"):
        return lower[:-1]
    return lower


def find_taxon(hint: str | None) -> TaxonomicClass | None:
    """Match a user-supplied class hint (plural, singular or display name)."""
    if not hint:
        return None
    requested = hint.strip().lower()
    for taxon in TAXONOMIC_CLASSES:
        if requested in (taxon.name, taxon.singular, taxon.display_name.lower()):
            return taxon
        if requested.endswith("s") and requested[:-1] == taxon.name:
            return taxon
    return None


def infer_habitat(species_name: str, class_name: str) -> str:
    """Guess a habitat label from keywords in the name."""
    name = species_name.lower()
    for habitat, keywords in _HABITAT_KEYWORDS:
        if any(k in name for k in keywords):
            return habitat
    return _DEFAULT_HABITAT.get(class_name, "terrestrial")
