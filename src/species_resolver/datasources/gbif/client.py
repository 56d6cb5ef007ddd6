"""
GBIF occurrence API client with retry and circuit breaking.

API docs: https://www.gbif.org/developer/occurrence
No authentication. GBIF rate-limits aggressively and sometimes answers with
HTML error pages, so every failure mode here ends in an empty result plus a
recorded diagnostic, never an exception to the caller.
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any

import requests

from species_resolver.breaker import CircuitBreaker
from species_resolver.clock import Clock, utc_now
from species_resolver.datasources.gbif.models import (
    GBIFRecord,
    parse_records,
    parse_vernacular_names,
)
from species_resolver.datasources.gbif.species import (
    best_vernacular,
    best_vernacular_from,
    records_to_candidates,
)
from species_resolver.errors import (
    MalformedResponseError,
    RateLimitedError,
    TransientUpstreamError,
    UpstreamError,
)
from species_resolver.services.http import create_session

if TYPE_CHECKING:
    from species_resolver.config import Settings
    from species_resolver.models import SpeciesCandidate
    from species_resolver.reference.taxa import TaxonomicClass

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# API configuration
# ---------------------------------------------------------------------------
API_BASE = "https://api.gbif.org/v1"
OCCURRENCE_SEARCH = "occurrence/search"
MAX_LIMIT = 300  # GBIF page maximum for occurrence search
SNIPPET_CHARS = 512

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_AFTER = timedelta(seconds=60)
MAX_RETRY_AFTER_SECONDS = 86_400.0


@dataclass
class UpstreamFailure:
    """Last failure seen by the client, kept for diagnostics."""

    message: str
    status: int | None = None
    snippet: str = ""
    at: datetime | None = None


def parse_retry_after(value: str | None, now: datetime, default: timedelta) -> timedelta:
    """Parse a Retry-After header given as seconds or an HTTP date."""
    if not value:
        return default
    try:
        seconds = float(value)
    except ValueError:
        seconds = None
    if seconds is not None:
        if not math.isfinite(seconds):
            return default
        return timedelta(seconds=min(max(seconds, 0.0), MAX_RETRY_AFTER_SECONDS))
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return max(when - now, timedelta(0))


class GBIFClient:
    """Fetch species near a point from GBIF occurrence search."""

    def __init__(
        self,
        session: requests.Session | None = None,
        breaker: CircuitBreaker | None = None,
        *,
        base_url: str = API_BASE,
        timeout: float = 10.0,
        limit: int = MAX_LIMIT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_base: float = 1.0,
        max_jitter: float = 0.25,
        default_retry_after: timedelta = DEFAULT_RETRY_AFTER,
        vernacular_lookups: int = 20,
        clock: Clock = utc_now,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.session = session or create_session(timeout=timeout)
        self.breaker = breaker or CircuitBreaker(clock=clock)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.limit = min(limit, MAX_LIMIT)
        self.max_attempts = max(max_attempts, 1)
        self.backoff_base = backoff_base
        self.max_jitter = max_jitter
        self.default_retry_after = default_retry_after
        self.vernacular_lookups = vernacular_lookups
        self.last_error: UpstreamFailure | None = None
        self._clock = clock
        self._sleep = sleep
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        session: requests.Session | None = None,
        clock: Clock = utc_now,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> GBIFClient:
        breaker = CircuitBreaker(
            failure_threshold=settings.breaker_failure_threshold,
            open_duration=timedelta(seconds=settings.breaker_open_seconds),
            rate_limit_padding=timedelta(seconds=settings.rate_limit_padding_seconds),
            max_rate_limit_open=timedelta(seconds=settings.rate_limit_max_open_seconds),
            clock=clock,
        )
        return cls(
            session=session,
            breaker=breaker,
            base_url=settings.gbif_base_url,
            timeout=settings.upstream_timeout_seconds,
            limit=settings.upstream_limit,
            max_attempts=settings.upstream_max_attempts,
            default_retry_after=timedelta(seconds=settings.default_retry_after_seconds),
            vernacular_lookups=settings.vernacular_lookups,
            clock=clock,
            sleep=sleep,
            rng=rng,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch(
        self,
        lat: float,
        lon: float,
        taxon: TaxonomicClass,
        radius_km: float,
    ) -> list[SpeciesCandidate]:
        """Species observed within ``radius_km`` of the point. Never raises.

        Returns an empty list on any failure; see ``last_error`` for why.
        """
        if not self.breaker.allow_request():
            state = self.breaker.snapshot()
            self.last_error = UpstreamFailure(
                message=f"GBIF circuit open - {state.last_open_reason}",
                at=self._clock(),
            )
            logger.warning(
                "GBIF circuit open, short-circuiting %s request (open until %s)",
                taxon.name,
                state.open_until.isoformat() if state.open_until else "?",
            )
            return []

        params: dict[str, Any] = {
            "geoDistance": f"{lat},{lon},{radius_km:g}km",
            "taxonKey": taxon.upstream_key,
            "limit": self.limit,
            "hasCoordinate": "true",
            "hasGeospatialIssue": "false",
            "occurrenceStatus": "PRESENT",
        }
        try:
            payload = self._get_with_retries(OCCURRENCE_SEARCH, params)
            if not isinstance(payload, dict):
                msg = "GBIF payload is not a JSON object"
                raise MalformedResponseError(msg, snippet=str(payload)[:SNIPPET_CHARS])
        except RateLimitedError as exc:
            self._record_error(exc)
            self.breaker.record_rate_limit(
                exc.retry_after,
                f"429 rate limit: retry-after {exc.retry_after.total_seconds():g}s",
            )
            return []
        except UpstreamError as exc:
            self._record_error(exc)
            self.breaker.record_failure(str(exc))
            return []

        self.breaker.record_success()
        self.last_error = None

        records = parse_records(payload.get("results"))
        vernaculars = self._lookup_vernaculars(records)
        source = f"gbif-{radius_km:g}km"
        candidates = records_to_candidates(records, taxon, source, vernaculars)
        logger.debug(
            "GBIF fetch for %s within %gkm: %d raw records, %d species",
            taxon.name,
            radius_km,
            len(records),
            len(candidates),
        )
        return candidates

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_with_retries(self, endpoint: str, params: dict[str, Any]) -> Any:
        """GET with exponential backoff on transient errors only."""
        attempt = 1
        while True:
            try:
                return self._get_once(endpoint, params)
            except TransientUpstreamError as exc:
                if attempt >= self.max_attempts:
                    logger.error(
                        "GBIF request failed after %d attempts: %s", self.max_attempts, exc
                    )
                    raise
                logger.warning(
                    "GBIF attempt %d/%d failed: %s", attempt, self.max_attempts, exc
                )
                self._sleep(self._backoff(attempt))
                attempt += 1

    def _backoff(self, attempt: int) -> float:
        return self.backoff_base * 2 ** (attempt - 1) + self._rng.uniform(0, self.max_jitter)

    def _get_once(self, endpoint: str, params: dict[str, Any]) -> Any:
        """Single GET, classifying every failure into an ``UpstreamError``."""
        url = f"{self.base_url}/{endpoint}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            msg = f"GBIF request timed out: {exc}"
            raise TransientUpstreamError(msg) from exc
        except requests.RequestException as exc:
            msg = f"GBIF request failed: {exc}"
            raise TransientUpstreamError(msg) from exc

        body = resp.text or ""
        snippet = body[:SNIPPET_CHARS]
        status = resp.status_code

        if status == 429:
            header = resp.headers.get("Retry-After")
            retry_after = parse_retry_after(header, self._clock(), self.default_retry_after)
            msg = f"GBIF rate limited (retry-after {header})"
            raise RateLimitedError(msg, retry_after=retry_after, snippet=snippet)
        if status >= 500:
            msg = f"GBIF returned {status}"
            raise TransientUpstreamError(msg, status=status, snippet=snippet)
        if not resp.ok:
            msg = f"GBIF returned {status}"
            raise UpstreamError(msg, status=status, snippet=snippet)

        content_type = resp.headers.get("Content-Type", "")
        if body.lstrip().startswith("<") or "json" not in content_type.lower():
            msg = f"Unexpected content from GBIF: {content_type or 'no content type'}"
            raise MalformedResponseError(msg, status=status, snippet=snippet)
        try:
            return resp.json()
        except ValueError as exc:
            msg = f"Invalid JSON from GBIF: {exc}"
            raise MalformedResponseError(msg, status=status, snippet=snippet) from exc

    def _lookup_vernaculars(self, records: list[GBIFRecord]) -> dict[int, str]:
        """Ask the species endpoint for common names the records lacked."""
        found: dict[int, str] = {}
        if self.vernacular_lookups <= 0:
            return found
        keys = [
            r.lookup_key
            for r in records
            if r.is_species_level and r.lookup_key is not None and not best_vernacular(r)
        ]
        for key in list(dict.fromkeys(keys))[: self.vernacular_lookups]:
            try:
                payload = self._get_once(f"species/{key}/vernacularNames", {"limit": 10})
            except RateLimitedError as exc:
                self.breaker.record_rate_limit(
                    exc.retry_after,
                    f"429 rate limit during vernacular lookup: retry-after "
                    f"{exc.retry_after.total_seconds():g}s",
                )
                break
            except UpstreamError as exc:
                logger.debug("Vernacular lookup failed for species %s: %s", key, exc)
                continue
            results = payload.get("results") if isinstance(payload, dict) else None
            name = best_vernacular_from(parse_vernacular_names(results))
            if name:
                found[key] = name
        return found

    def _record_error(self, exc: UpstreamError) -> None:
        self.last_error = UpstreamFailure(
            message=str(exc),
            status=exc.status,
            snippet=exc.snippet,
            at=self._clock(),
        )
        logger.warning(
            "GBIF request failed: %s (status=%s) body=%r",
            exc,
            exc.status,
            exc.snippet,
        )
