"""Tests for the ecoregion classifier and taxonomic class registry."""

from __future__ import annotations

import pytest

from species_resolver.ecoregion import UNKNOWN, classify, region_tag_for
from species_resolver.reference.taxa import (
    BIRDS,
    FISH,
    MAMMALS,
    TAXONOMIC_CLASSES,
    find_taxon,
    infer_habitat,
    singularize,
)


class TestClassify:
    """Bounding-box classification."""

    def test_southern_california(self) -> None:
        eco = classify(34.045225, -117.267289)
        assert eco.name == "Southern California Mountains"
        assert eco.code == "8"
        assert eco.region_tag == "california"

    def test_first_match_wins(self) -> None:
        # Inside both Marine West Coast Forest and Cascades boxes
        eco = classify(45.5, -122.6)
        assert eco.name == "Marine West Coast Forest"
        assert eco.region_tag == "pacific_northwest"

    def test_state_box_fallback(self) -> None:
        eco = classify(26.5, -105.0)
        assert eco.code == "TX"

    def test_open_ocean_is_unknown(self) -> None:
        eco = classify(0.0, -160.0)
        assert eco.is_unknown
        assert eco.name == UNKNOWN.name
        assert eco.region_tag == ""

    def test_europe_is_unknown(self) -> None:
        assert classify(48.85, 2.35).is_unknown

    def test_edges_inclusive(self) -> None:
        assert classify(32.5, -119.0).name == "Southern California Mountains"


class TestRegionTag:
    """Regional fallback keys."""

    @pytest.mark.parametrize(
        ("lat", "lon", "tag"),
        [
            (37.77, -122.42, "california"),
            (47.6, -122.3, "pacific_northwest"),
            (40.7, -74.0, "eastern_forests"),
            (51.5, -0.12, ""),
        ],
    )
    def test_regions(self, lat: float, lon: float, tag: str) -> None:
        assert region_tag_for(lat, lon) == tag


class TestTaxa:
    """Taxonomic class lookup."""

    def test_registry_keys(self) -> None:
        assert {t.name: t.upstream_key for t in TAXONOMIC_CLASSES} == {
            "birds": 212,
            "mammals": 359,
            "fish": 204,
            "reptiles": 358,
            "amphibians": 131,
        }

    @pytest.mark.parametrize("hint", ["birds", "Bird", " BIRDS ", "Birds"])
    def test_find_taxon_variants(self, hint: str) -> None:
        assert find_taxon(hint) is BIRDS

    def test_find_fish(self) -> None:
        assert find_taxon("fish") is FISH

    def test_unknown_hint(self) -> None:
        assert find_taxon("insects") is None
        assert find_taxon(None) is None
        assert find_taxon("") is None

    def test_singularize(self) -> None:
        assert singularize("birds") == "bird"
        assert singularize("fish") == "fish"
        assert MAMMALS.singular == "mammal"

    def test_infer_habitat(self) -> None:
        assert infer_habitat("Wood Duck", "birds") == "aquatic"
        assert infer_habitat("Downy Woodpecker", "birds") == "forest"
        assert infer_habitat("House Mouse", "mammals") == "urban"
        assert infer_habitat("Coyote", "mammals") == "terrestrial"
