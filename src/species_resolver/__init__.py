"""Species Resolver - pick a displayable species for any coordinate.

Architecture::

    reference/     Static tables (taxonomic classes, ecoregion boxes, fallback species)
    ecoregion.py   Bounding-box ecoregion classifier
    names.py       Name normalizer for noisy vernacular/scientific strings
    datasources/   External APIs (GBIF occurrence search + circuit breaker)
    store.py       Location-clustered, per-class bounded species cache
    cascade.py     Tiered fallback: cache → GBIF 50 km → GBIF 200 km → regional → global
    selection.py   Cooldown-aware random / least-recently-used pick
    service.py     Long-lived facade wiring the components together
    services/      Shared utilities (HTTP client with retry)

Data flow: classify → cache → (miss) upstream tiers → static tiers → cache write → select
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from species_resolver.config import Settings
from species_resolver.schemas import SelectedSpecies
from species_resolver.service import SpeciesService

__all__ = ["SelectedSpecies", "Settings", "SpeciesService", "__version__"]
