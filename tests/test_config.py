"""Tests for environment-driven settings."""

from __future__ import annotations

from datetime import timedelta

import pydantic
import pytest

from species_resolver.config import Settings, get_settings


class TestDefaults:
    """Out-of-the-box values."""

    def test_cascade_defaults(self, settings: Settings) -> None:
        assert settings.desired_count == 5
        assert settings.narrow_radius_km == 50
        assert settings.expanded_radius_km == 200

    def test_breaker_defaults(self, settings: Settings) -> None:
        assert settings.breaker_failure_threshold == 2
        assert settings.breaker_open_seconds == 120
        assert settings.rate_limit_padding_seconds == 5
        assert settings.rate_limit_max_open_seconds == 600

    def test_cooldown(self, settings: Settings) -> None:
        assert settings.cooldown == timedelta(days=2)


class TestEnvironment:
    """SPECIES_* overrides."""

    def test_no_repeat_days(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECIES_NO_REPEAT_DAYS", "3")
        assert Settings(_env_file=None).cooldown == timedelta(days=3)

    def test_cache_bound(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECIES_CACHE_MAX_PER_CLASS", "50")
        assert Settings(_env_file=None).cache_max_per_class == 50

    def test_rejects_non_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECIES_NO_REPEAT_DAYS", "0")
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)

    def test_rejects_inverted_radii(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="expanded_radius_km"):
            Settings(_env_file=None, narrow_radius_km=300, expanded_radius_km=200)

    def test_limit_capped_at_page_size(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, upstream_limit=1000)


class TestGetSettings:
    """Process-wide settings."""

    def test_cached(self) -> None:
        get_settings.cache_clear()
        assert get_settings() is get_settings()
