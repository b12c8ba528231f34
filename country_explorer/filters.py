from __future__ import annotations

"""Record predicates for search text, region and population bucket."""

from .records import CountryRecord, FilterCriteria, PopulationBucket


def matches_search(record: CountryRecord, search_text: str) -> bool:
    """Caseless substring match on name, region or subregion."""
    if not search_text:
        return True
    needle = search_text.casefold()
    for value in (record.name, record.region, record.subregion):
        if needle in (value or "").casefold():
            return True
    return False


def matches_region(record: CountryRecord, region: str) -> bool:
    """Exact, case-sensitive region match; empty region matches everything."""
    if not region:
        return True
    return record.region == region


def matches_population(record: CountryRecord, bucket: PopulationBucket) -> bool:
    return bucket.contains(record.population)


def matches_criteria(record: CountryRecord, criteria: FilterCriteria) -> bool:
    return (
        matches_search(record, criteria.search_text)
        and matches_region(record, criteria.region)
        and matches_population(record, criteria.population_bucket)
    )
