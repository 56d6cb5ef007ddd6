"""
Application settings.

Loaded from environment variables prefixed with ``SPECIES_`` (and an optional
``.env`` file). ``SPECIES_NO_REPEAT_DAYS=3`` sets the selection cooldown, for
example.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the resolver and its collaborators."""

    model_config = SettingsConfigDict(
        env_prefix="SPECIES_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "species-resolver"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Upstream (GBIF)
    gbif_base_url: str = "https://api.gbif.org/v1"
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)
    upstream_max_attempts: int = Field(default=3, ge=1)
    upstream_limit: int = Field(default=300, ge=1, le=300)  # GBIF page maximum
    vernacular_lookups: int = Field(default=20, ge=0)

    # Cascade
    desired_count: int = Field(default=5, ge=1)
    narrow_radius_km: float = Field(default=50.0, gt=0)
    expanded_radius_km: float = Field(default=200.0, gt=0)

    # Cache
    cache_max_per_class: int = Field(default=200, ge=1)

    # Selection
    no_repeat_days: float = Field(default=2.0, gt=0)

    # Circuit breaker
    breaker_failure_threshold: int = Field(default=2, ge=1)
    breaker_open_seconds: float = Field(default=120.0, gt=0)
    rate_limit_padding_seconds: float = Field(default=5.0, ge=0)
    rate_limit_max_open_seconds: float = Field(default=600.0, gt=0)
    default_retry_after_seconds: float = Field(default=60.0, gt=0)

    @model_validator(mode="after")
    def _check_radii(self) -> Settings:
        if self.expanded_radius_km < self.narrow_radius_km:
            msg = "expanded_radius_km must be >= narrow_radius_km"
            raise ValueError(msg)
        return self

    @property
    def cooldown(self) -> timedelta:
        return timedelta(days=self.no_repeat_days)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
