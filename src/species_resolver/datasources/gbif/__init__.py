"""GBIF occurrence data source.

Public API:
  - client: GBIFClient (retry, rate-limit handling, circuit breaker), UpstreamFailure
  - models: GBIFRecord, VernacularName (tolerant intermediate records)
  - species: best_vernacular, records_to_candidates
"""

from species_resolver.datasources.gbif.client import (
    API_BASE,
    GBIFClient,
    UpstreamFailure,
    parse_retry_after,
)
from species_resolver.datasources.gbif.models import GBIFRecord, VernacularName, parse_records
from species_resolver.datasources.gbif.species import best_vernacular, records_to_candidates

__all__ = [
    "API_BASE",
    "GBIFClient",
    "GBIFRecord",
    "UpstreamFailure",
    "VernacularName",
    "best_vernacular",
    "parse_records",
    "parse_retry_after",
    "records_to_candidates",
]
