"""Tests for the circuit breaker state machine."""

from __future__ import annotations

from datetime import timedelta

from species_resolver.breaker import CircuitBreaker
from support import FakeClock


def make_breaker(clock: FakeClock) -> CircuitBreaker:
    return CircuitBreaker(clock=clock)


class TestClosed:
    """Initial and success behavior."""

    def test_starts_closed(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        assert breaker.allow_request()
        assert not breaker.is_open

    def test_single_failure_stays_closed(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_failure("503")
        assert breaker.allow_request()
        assert breaker.snapshot().consecutive_failures == 1

    def test_success_resets_failures(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_failure("503")
        breaker.record_success()
        breaker.record_failure("503")
        assert breaker.allow_request()


class TestOpening:
    """Transitions into the open state."""

    def test_threshold_opens_for_two_minutes(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_failure("503")
        breaker.record_failure("503 again")
        state = breaker.snapshot()
        assert state.is_open
        assert state.open_until == clock.now + timedelta(minutes=2)
        assert state.last_open_reason == "503 again"
        assert not breaker.allow_request()

    def test_rate_limit_opens_immediately(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_rate_limit(timedelta(seconds=20), "429")
        state = breaker.snapshot()
        assert state.is_open
        assert state.open_until == clock.now + timedelta(seconds=25)

    def test_rate_limit_window_capped(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_rate_limit(timedelta(hours=3), "429")
        assert breaker.snapshot().open_until == clock.now + timedelta(minutes=10)

    def test_custom_threshold(self, clock: FakeClock) -> None:
        breaker = CircuitBreaker(failure_threshold=3, clock=clock)
        breaker.record_failure("x")
        breaker.record_failure("x")
        assert breaker.allow_request()
        breaker.record_failure("x")
        assert not breaker.allow_request()


class TestExpiry:
    """Open → closed once the window passes."""

    def test_stays_open_before_expiry(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_rate_limit(timedelta(seconds=20), "429")
        clock.advance(seconds=24)
        assert not breaker.allow_request()

    def test_closes_after_expiry(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_rate_limit(timedelta(seconds=20), "429")
        clock.advance(seconds=25)
        assert breaker.allow_request()
        state = breaker.snapshot()
        assert not state.is_open
        assert state.consecutive_failures == 0
        assert state.open_until is None

    def test_is_open_does_not_transition(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_failure("a")
        breaker.record_failure("b")
        clock.advance(minutes=3)
        assert not breaker.is_open
        # Still flagged until someone asks to make a request
        assert breaker.snapshot().is_open

    def test_reset(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        breaker.record_rate_limit(timedelta(seconds=60), "429")
        breaker.reset()
        assert breaker.allow_request()

    def test_snapshot_is_a_copy(self, clock: FakeClock) -> None:
        breaker = make_breaker(clock)
        snap = breaker.snapshot()
        snap.is_open = True
        assert breaker.allow_request()
