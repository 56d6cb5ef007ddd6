"""Shared fixtures for species-resolver tests."""

from __future__ import annotations

import random

import pytest
from support import FakeClock

from species_resolver.config import Settings


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def settings() -> Settings:
    # _env_file=None keeps a developer's .env out of the tests
    return Settings(_env_file=None)
