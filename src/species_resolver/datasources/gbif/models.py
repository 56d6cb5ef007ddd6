"""Typed intermediate records for GBIF responses.

GBIF payloads are loosely typed: fields go missing, change type between
endpoints, or arrive as HTML. These models accept anything and turn absent
or wrong-typed fields into "no data" (``None`` / empty list) instead of
raising, so one odd record can never fail a whole fetch.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Ranks below which a record names a single species
SPECIES_LEVEL_RANKS = frozenset({"SPECIES", "SUBSPECIES", "VARIETY", "FORM"})


def _str_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


class VernacularName(BaseModel):
    """One language-tagged common name."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    vernacular_name: str | None = Field(default=None, alias="vernacularName")
    language: str | None = None

    @field_validator("vernacular_name", "language", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return _str_or_none(value)

    @model_validator(mode="before")
    @classmethod
    def _accept_lang_alias(cls, data: Any) -> Any:
        # Some responses tag the language as "lang"
        if isinstance(data, dict) and "language" not in data and "lang" in data:
            return {**data, "language": data["lang"]}
        return data

    @property
    def is_english(self) -> bool:
        return self.language in ("eng", "en")

    @property
    def is_english_like(self) -> bool:
        return bool(self.language and self.language.lower().startswith("en"))


class GBIFRecord(BaseModel):
    """An occurrence or species-search result, reduced to naming fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    key: int | None = None
    species_key: int | None = Field(default=None, alias="speciesKey")
    scientific_name: str | None = Field(default=None, alias="scientificName")
    canonical_name: str | None = Field(default=None, alias="canonicalName")
    species: str | None = None
    taxon_rank: str | None = Field(default=None, alias="taxonRank")
    rank: str | None = None
    vernacular_name: str | None = Field(default=None, alias="vernacularName")
    vernacular_names: list[VernacularName] = Field(default_factory=list, alias="vernacularNames")
    common_name: str | None = Field(default=None, alias="commonName")

    @model_validator(mode="before")
    @classmethod
    def _fold_vernacular_array(cls, data: Any) -> Any:
        # vernacularName sometimes arrives as [{vernacularName, language}, ...]
        if isinstance(data, dict) and isinstance(data.get("vernacularName"), list):
            extra = data["vernacularName"]
            existing = data.get("vernacularNames")
            merged = (existing if isinstance(existing, list) else []) + extra
            return {**data, "vernacularName": None, "vernacularNames": merged}
        return data

    @field_validator("key", "species_key", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int | None:
        return _int_or_none(value)

    @field_validator(
        "scientific_name",
        "canonical_name",
        "species",
        "taxon_rank",
        "rank",
        "vernacular_name",
        "common_name",
        mode="before",
    )
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return _str_or_none(value)

    @field_validator("vernacular_names", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [v for v in value if isinstance(v, dict)]

    @property
    def best_scientific(self) -> str:
        """Most specific scientific string available."""
        return self.scientific_name or self.species or self.canonical_name or ""

    @property
    def lookup_key(self) -> int | None:
        """Key for the vernacularNames endpoint."""
        return self.species_key or self.key

    @property
    def is_species_level(self) -> bool:
        """False only when the record is explicitly ranked above species."""
        rank = (self.taxon_rank or self.rank or "").upper()
        return not rank or rank in SPECIES_LEVEL_RANKS


def parse_records(results: Any) -> list[GBIFRecord]:
    """Parse a ``results`` array, skipping anything that is not an object."""
    if not isinstance(results, list):
        return []
    return [GBIFRecord.model_validate(item) for item in results if isinstance(item, dict)]


def parse_vernacular_names(results: Any) -> list[VernacularName]:
    if not isinstance(results, list):
        return []
    return [VernacularName.model_validate(item) for item in results if isinstance(item, dict)]
