"""Exception types for species resolution.

Upstream errors are raised inside the GBIF client and absorbed by
``GBIFClient.fetch``; callers of the service never see them.
``NoCandidatesError`` only escapes the cascade when a global fallback
table is empty, which is a configuration bug.
"""

from __future__ import annotations

from datetime import timedelta


class SpeciesResolverError(Exception):
    """Base class for all species-resolver errors."""


class UpstreamError(SpeciesResolverError):
    """A request to the occurrence API failed."""

    def __init__(self, message: str, *, status: int | None = None, snippet: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.snippet = snippet


class TransientUpstreamError(UpstreamError):
    """Timeout, connection failure or 5xx. Worth retrying."""


class RateLimitedError(UpstreamError):
    """HTTP 429. Never retried; opens the circuit breaker."""

    def __init__(
        self,
        message: str,
        *,
        retry_after: timedelta,
        status: int | None = 429,
        snippet: str = "",
    ) -> None:
        super().__init__(message, status=status, snippet=snippet)
        self.retry_after = retry_after


class MalformedResponseError(UpstreamError):
    """Body was HTML, not JSON, or not the expected shape."""


class NoCandidatesError(SpeciesResolverError):
    """No species could be produced for a taxonomic class."""
