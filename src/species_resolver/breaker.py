"""
Circuit breaker for the occurrence API.

One breaker per process, shared by every upstream call::

    closed ──(429 / repeated failures)──► open ──(open_until passes)──► closed

While open, ``allow_request()`` is False and callers must not perform I/O.
All transitions happen under a lock so concurrent requests cannot lose
updates to the failure count or the expiry time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from species_resolver.clock import Clock, utc_now

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_THRESHOLD = 2
DEFAULT_OPEN_DURATION = timedelta(minutes=2)
DEFAULT_RATE_LIMIT_PADDING = timedelta(seconds=5)
DEFAULT_MAX_RATE_LIMIT_OPEN = timedelta(minutes=10)


@dataclass
class CircuitBreakerState:
    """Mutable breaker state. Only the breaker writes it."""

    is_open: bool = False
    open_until: datetime | None = None
    consecutive_failures: int = 0
    last_open_reason: str | None = None


class CircuitBreaker:
    """Small state machine guarding a rate-limited dependency."""

    def __init__(
        self,
        *,
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        open_duration: timedelta = DEFAULT_OPEN_DURATION,
        rate_limit_padding: timedelta = DEFAULT_RATE_LIMIT_PADDING,
        max_rate_limit_open: timedelta = DEFAULT_MAX_RATE_LIMIT_OPEN,
        clock: Clock = utc_now,
    ) -> None:
        self.failure_threshold = failure_threshold
        self.open_duration = open_duration
        self.rate_limit_padding = rate_limit_padding
        self.max_rate_limit_open = max_rate_limit_open
        self._clock = clock
        self._state = CircuitBreakerState()
        self._lock = threading.Lock()

    def allow_request(self) -> bool:
        """True when a call may go out. Closes an expired open breaker."""
        with self._lock:
            state = self._state
            if not state.is_open:
                return True
            now = self._clock()
            if state.open_until is not None and now < state.open_until:
                return False
            self._state = CircuitBreakerState()
            logger.info("GBIF circuit closed, resuming requests")
            return True

    def record_success(self) -> None:
        with self._lock:
            self._state.consecutive_failures = 0
            self._state.last_open_reason = None

    def record_failure(self, reason: str) -> None:
        """Count one failed call; open for ``open_duration`` at the threshold."""
        with self._lock:
            self._state.consecutive_failures += 1
            if self._state.consecutive_failures >= self.failure_threshold:
                self._open(self.open_duration, reason)

    def record_rate_limit(self, retry_after: timedelta, reason: str) -> None:
        """Open immediately for ``retry_after`` plus padding, capped."""
        duration = min(retry_after + self.rate_limit_padding, self.max_rate_limit_open)
        with self._lock:
            self._state.consecutive_failures += 1
            self._open(duration, reason)

    def _open(self, duration: timedelta, reason: str) -> None:
        self._state.is_open = True
        self._state.open_until = self._clock() + duration
        self._state.last_open_reason = reason
        logger.warning(
            "GBIF circuit opened until %s: %s",
            self._state.open_until.isoformat(),
            reason,
        )

    @property
    def is_open(self) -> bool:
        """Open and not yet expired. Does not transition."""
        with self._lock:
            state = self._state
            return bool(
                state.is_open and state.open_until is not None and self._clock() < state.open_until
            )

    def snapshot(self) -> CircuitBreakerState:
        """Copy of the current state for diagnostics."""
        with self._lock:
            return replace(self._state)

    def reset(self) -> None:
        with self._lock:
            self._state = CircuitBreakerState()
