from __future__ import annotations

"""Display formatting for country cards and tables."""

from typing import Iterable

import pandas as pd

from .records import CountryRecord

NA = "N/A"
EMPTY_MESSAGE = "No country found."

CARD_COLUMNS = [
    "Capital",
    "Region",
    "Subregion",
    "Population",
    "Area",
    "Coordinates",
    "Borders",
    "Timezones",
    "Currency",
    "Languages",
]


def _or_na(value: str | None) -> str:
    return value if value else NA


def _join(values: tuple[str, ...]) -> str:
    return ", ".join(values) if values else NA


def format_population(population: int | None) -> str:
    if population is None:
        return NA
    return f"{population:,}"


def format_area(area: float | None) -> str:
    if area is None:
        return NA
    if float(area).is_integer():
        return f"{int(area):,} km²"
    return f"{area:,} km²"


def format_coordinates(coordinates: tuple[float, float] | None) -> str:
    if coordinates is None:
        return NA
    lat, lng = coordinates
    return f"Lat: {lat:g}, Lng: {lng:g}"


def card_fields(record: CountryRecord) -> dict[str, str]:
    """Label -> display string for one card. Never returns an empty value."""
    return {
        "Capital": _or_na(record.capital),
        "Region": _or_na(record.region),
        "Subregion": _or_na(record.subregion),
        "Population": format_population(record.population),
        "Area": format_area(record.area),
        "Coordinates": format_coordinates(record.coordinates),
        "Borders": _join(record.borders),
        "Timezones": _join(record.timezones),
        "Currency": _or_na(record.currency),
        "Languages": _join(record.languages),
    }


def records_to_frame(records: Iterable[CountryRecord]) -> pd.DataFrame:
    rows = [{"Name": r.name, **card_fields(r)} for r in records]
    return pd.DataFrame(rows, columns=["Name", *CARD_COLUMNS])
