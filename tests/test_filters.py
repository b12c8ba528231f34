import pytest

from country_explorer.filters import matches_criteria, matches_population, matches_region, matches_search
from country_explorer.records import CountryRecord, FilterCriteria, PopulationBucket

FRANCE = CountryRecord(name="France", region="Europe", subregion="Western Europe", population=67_000_000)
PALAU = CountryRecord(name="Palau", region="Oceania", subregion="Micronesia", population=18_000)
NAMELESS_REGION = CountryRecord(name="Atlantis")


def test_empty_search_matches_everything():
    assert matches_search(NAMELESS_REGION, "")


@pytest.mark.parametrize("text", ["pa", "PA", "Pa", "pA"])
def test_search_ignores_case(text):
    assert matches_search(PALAU, text)
    assert not matches_search(FRANCE, text)


@pytest.mark.parametrize("text", ["ß", "ß".upper(), "ss", "straße", "STRASSE"])
def test_search_ignores_case_beyond_ascii(text):
    record = CountryRecord(name="Straße Land")
    assert matches_search(record, text)
    assert matches_search(record, text) == matches_search(record, text.upper()) == matches_search(record, text.lower())


def test_whitespace_search_matches_names_with_spaces():
    assert matches_search(CountryRecord(name="New Zealand"), " ")
    assert not matches_search(PALAU, " ")


def test_search_matches_region_and_subregion():
    assert matches_search(FRANCE, "europe")
    assert matches_search(PALAU, "micro")


def test_search_treats_absent_fields_as_empty():
    assert not matches_search(NAMELESS_REGION, "europe")


def test_region_is_exact_and_case_sensitive():
    assert matches_region(FRANCE, "")
    assert matches_region(FRANCE, "Europe")
    assert not matches_region(FRANCE, "europe")
    assert not matches_region(NAMELESS_REGION, "Europe")


def test_population_bucket():
    assert matches_population(FRANCE, PopulationBucket.NONE)
    assert matches_population(FRANCE, PopulationBucket.LARGE)
    assert matches_population(PALAU, PopulationBucket.SMALL)
    assert not matches_population(NAMELESS_REGION, PopulationBucket.SMALL)


def test_criteria_combine_with_and():
    criteria = FilterCriteria("fr", "Europe", PopulationBucket.SMALL)
    assert not matches_criteria(FRANCE, criteria)
    assert matches_criteria(FRANCE, FilterCriteria("fr", "Europe", PopulationBucket.LARGE))
