from __future__ import annotations

"""Canonical country record and filter criteria types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SMALL_MAX = 1_000_000
LARGE_MIN = 50_000_000

REGIONS = ("Africa", "Americas", "Asia", "Europe", "Oceania")


@dataclass(frozen=True)
class CountryRecord:
    name: str
    capital: str | None = None
    region: str | None = None
    subregion: str | None = None
    population: int | None = None
    area: float | None = None
    coordinates: tuple[float, float] | None = None
    borders: tuple[str, ...] = field(default_factory=tuple)
    timezones: tuple[str, ...] = field(default_factory=tuple)
    currency: str | None = None
    languages: tuple[str, ...] = field(default_factory=tuple)
    flag_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        coords = None
        if self.coordinates is not None:
            coords = {"latitude": self.coordinates[0], "longitude": self.coordinates[1]}
        return {
            "name": self.name,
            "capital": self.capital,
            "region": self.region,
            "subregion": self.subregion,
            "population": self.population,
            "area": self.area,
            "coordinates": coords,
            "borders": list(self.borders),
            "timezones": list(self.timezones),
            "currency": self.currency,
            "languages": list(self.languages),
            "flag_url": self.flag_url,
        }


class PopulationBucket(str, Enum):
    NONE = ""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def parse(cls, value: str | None) -> "PopulationBucket":
        """Parse user input; empty, "none" and "all" mean no bucket."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("", "none", "all"):
            return cls.NONE
        for bucket in cls:
            if bucket.value == text:
                return bucket
        raise ValueError(f"Unknown population bucket: {value!r}")

    @classmethod
    def for_population(cls, population: int) -> "PopulationBucket":
        if population < SMALL_MAX:
            return cls.SMALL
        if population <= LARGE_MIN:
            return cls.MEDIUM
        return cls.LARGE

    def contains(self, population: int | None) -> bool:
        if self is PopulationBucket.NONE:
            return True
        # Absent population sits in no range.
        if population is None:
            return False
        return PopulationBucket.for_population(population) is self


@dataclass(frozen=True)
class FilterCriteria:
    search_text: str = ""
    region: str = ""
    population_bucket: PopulationBucket = PopulationBucket.NONE

    @classmethod
    def from_inputs(
        cls,
        search_text: str | None = None,
        region: str | None = None,
        population: str | None = None,
    ) -> "FilterCriteria":
        return cls(
            search_text=search_text or "",
            region=(region or "").strip(),
            population_bucket=PopulationBucket.parse(population),
        )
