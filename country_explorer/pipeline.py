from __future__ import annotations

"""Raw payload -> normalized, deduplicated base list -> visible list."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .dedupe import dedupe_by_name
from .extract import unwrap_records
from .filters import matches_criteria
from .normalize import normalize_many
from .records import CountryRecord, FilterCriteria, PopulationBucket


class DisplayPolicy(str, Enum):
    SHOW_ALL = "show_all"
    REQUIRE_FILTER = "require_filter"


@dataclass(frozen=True)
class BaseList:
    records: tuple[CountryRecord, ...]
    rejected: int


@dataclass(frozen=True)
class PipelineView:
    visible: tuple[CountryRecord, ...]
    is_active: bool
    show_results: bool
    loading: bool
    error: str | None
    total: int


def build_base_list(payload: Any, extract_cfg: dict[str, Any] | None = None) -> BaseList:
    """Build the session's base list once per successful fetch."""
    raws = unwrap_records(payload, extract_cfg)
    records, rejected = normalize_many(raws)
    return BaseList(records=tuple(dedupe_by_name(records)), rejected=rejected)


def is_active_filter(criteria: FilterCriteria) -> bool:
    return bool(
        criteria.search_text
        or criteria.region
        or criteria.population_bucket is not PopulationBucket.NONE
    )


def compute_visible_list(
    base_records: Iterable[CountryRecord],
    criteria: FilterCriteria,
) -> tuple[CountryRecord, ...]:
    """Order-preserving filter of the base list; an empty result is not an error."""
    return tuple(r for r in base_records if matches_criteria(r, criteria))


def available_regions(base_records: Iterable[CountryRecord]) -> list[str]:
    return sorted({r.region for r in base_records if r.region})
