"""Static reference data.

Tables that never change at runtime: taxonomic classes, ecoregion bounding
boxes, and the regional/global fallback species.

Adding a new region:
1. Add a box to ``REGION_BOXES`` in ``ecoregions.py``
2. Add a table under the same tag in ``REGIONAL_FALLBACKS`` in ``fallbacks.py``
"""

from species_resolver.reference.ecoregions import ECOREGION_RULES as ECOREGION_RULES
from species_resolver.reference.ecoregions import REGION_BOXES as REGION_BOXES
from species_resolver.reference.ecoregions import BoundingBox as BoundingBox
from species_resolver.reference.fallbacks import GLOBAL_FALLBACKS as GLOBAL_FALLBACKS
from species_resolver.reference.fallbacks import REGIONAL_FALLBACKS as REGIONAL_FALLBACKS
from species_resolver.reference.fallbacks import SCIENTIFIC_TO_COMMON as SCIENTIFIC_TO_COMMON
from species_resolver.reference.taxa import TAXONOMIC_CLASSES as TAXONOMIC_CLASSES
from species_resolver.reference.taxa import TaxonomicClass as TaxonomicClass
from species_resolver.reference.taxa import find_taxon as find_taxon
