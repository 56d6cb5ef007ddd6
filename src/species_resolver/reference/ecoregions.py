"""Bounding boxes for ecoregion classification and regional fallbacks.

Rules are evaluated in order and the first match wins, so the narrower
ecoregions come before the broad state boxes at the end. Coverage is North
America only; everything else classifies as ``Unknown``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """SW/NE lat-lon bounding box (edges inclusive)."""

    swlat: float
    swlng: float
    nelat: float
    nelng: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.swlat <= lat <= self.nelat and self.swlng <= lon <= self.nelng


@dataclass(frozen=True)
class EcoregionRule:
    """One ordered classifier rule."""

    name: str
    code: str
    state: str
    bbox: BoundingBox


# EPA Level II style ecoregions, west to east
# (name, code, state, (swlat, swlng, nelat, nelng))
_RULE_ROWS: tuple[tuple[str, str, str, tuple[float, float, float, float]], ...] = (
    ("Marine West Coast Forest", "1", "Washington", (40.5, -124.7, 49.5, -121.5)),
    ("Cascades", "9", "Oregon", (40.0, -123.0, 49.0, -120.0)),
    ("Sierra Nevada", "5", "California", (35.5, -121.0, 40.0, -118.5)),
    ("Central California Foothills", "6", "California", (34.0, -123.0, 38.5, -119.0)),
    ("Central California Valley", "7", "California", (35.0, -122.0, 40.0, -119.0)),
    ("Southern California Mountains", "8", "California", (32.5, -119.0, 35.5, -116.0)),
    ("Mojave Basin and Range", "14", "California", (33.5, -118.0, 38.0, -114.0)),
    ("Great Plains", "92", "Nebraska", (36.0, -104.0, 49.0, -96.0)),
    ("Western Corn Belt Plains", "93", "Iowa", (40.0, -96.0, 43.5, -90.0)),
    ("Texas Blackland Prairies", "94", "Texas", (28.5, -97.5, 33.5, -95.5)),
    ("South Central Plains", "95", "Texas", (30.0, -98.0, 35.0, -92.0)),
    ("Southeastern Plains", "96", "Virginia", (30.0, -92.0, 37.0, -82.0)),
    ("Middle Atlantic Coastal Plain", "97", "Virginia", (35.0, -80.0, 40.5, -74.0)),
    ("Northern Appalachian/Boreal Forest", "98", "Maine", (43.5, -71.0, 47.5, -67.0)),
    ("Mixed Wood Plains", "99", "New York", (40.0, -80.0, 45.0, -73.0)),
    # Coarse state boxes for whatever the ecoregions above missed
    ("Texas", "TX", "Texas", (25.8, -106.6, 36.5, -93.5)),
    ("California", "CA", "California", (32.5, -124.5, 42.0, -114.0)),
)

ECOREGION_RULES: tuple[EcoregionRule, ...] = tuple(
    EcoregionRule(name, code, state, BoundingBox(*bbox)) for name, code, state, bbox in _RULE_ROWS
)

# Keys into REGIONAL_FALLBACKS, checked in order
REGION_BOXES: tuple[tuple[str, BoundingBox], ...] = (
    ("california", BoundingBox(32.0, -125.0, 42.0, -114.0)),
    ("pacific_northwest", BoundingBox(42.0, -125.0, 49.0, -116.0)),
    ("eastern_forests", BoundingBox(25.0, -100.0, 47.0, -66.0)),
)
