"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, retry and breaker handling
    ├── models.py         # Typed records for API responses
    └── species.py        # Records → SpeciesCandidate normalization

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above. See ``gbif/``.

2. Expose a client with the same contract as ``GBIFClient.fetch``::

       def fetch(lat, lon, taxon, radius_km) -> list[SpeciesCandidate]:
           ...  # never raises; returns [] on failure

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Pass the client to ``CascadeController`` (see ``cascade.py``).

5. Add tests in ``tests/test_{name}.py``.
"""
