"""Cooldown-aware species selection.

Picks uniformly among candidates not shown within the cooldown window. When
every candidate is cooling down, the least-recently-used one wins, so a
choice is always available.
"""

from __future__ import annotations

import random
from datetime import timedelta

from species_resolver.clock import Clock, utc_now
from species_resolver.errors import NoCandidatesError
from species_resolver.models import SpeciesCandidate

DEFAULT_COOLDOWN = timedelta(days=2)


class SelectionPolicy:
    """Random-among-eligible, else least-recently-used."""

    def __init__(
        self,
        cooldown: timedelta = DEFAULT_COOLDOWN,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self.cooldown = cooldown
        self._clock = clock
        self._rng = rng or random.Random()

    def partition(
        self, candidates: list[SpeciesCandidate]
    ) -> tuple[list[SpeciesCandidate], list[SpeciesCandidate]]:
        """Split into (eligible, in_cooldown) at the current time."""
        now = self._clock()
        eligible: list[SpeciesCandidate] = []
        cooling: list[SpeciesCandidate] = []
        for candidate in candidates:
            used = candidate.last_used_at
            if used is None or now - used >= self.cooldown:
                eligible.append(candidate)
            else:
                cooling.append(candidate)
        return eligible, cooling

    def select(self, candidates: list[SpeciesCandidate]) -> SpeciesCandidate:
        """Choose one candidate and stamp ``last_used_at`` on it.

        Raises:
            NoCandidatesError: If ``candidates`` is empty.
        """
        if not candidates:
            msg = "cannot select from an empty candidate list"
            raise NoCandidatesError(msg)

        eligible, cooling = self.partition(candidates)
        if eligible:
            chosen = self._rng.choice(eligible)
        else:
            # min() keeps list order on ties
            chosen = min(cooling, key=lambda c: c.last_used_at or self._clock())

        chosen.last_used_at = self._clock()
        return chosen
