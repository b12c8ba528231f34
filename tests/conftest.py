"""Shared fixtures: raw payloads in the shapes the supported sources return."""

import json

import pytest


@pytest.fixture
def v2_france():
    return {
        "name": "France",
        "capital": "Paris",
        "region": "Europe",
        "subregion": "Western Europe",
        "population": 67391582,
        "area": 640679.0,
        "latlng": [46.0, 2.0],
        "borders": ["AND", "BEL", "DEU"],
        "timezones": ["UTC-10:00", "UTC+01:00"],
        "currencies": [{"code": "EUR", "name": "Euro", "symbol": "€"}],
        "languages": [{"iso639_1": "fr", "name": "French"}],
        "flag": "https://flagcdn.com/fr.svg",
    }


@pytest.fixture
def v3_japan():
    return {
        "name": {"common": "Japan", "official": "Japan"},
        "capital": ["Tokyo"],
        "region": "Asia",
        "subregion": "Eastern Asia",
        "population": 125836021,
        "area": 377930.0,
        "latlng": [36.0, 138.0],
        "currencies": {"JPY": {"name": "Japanese yen", "symbol": "¥"}},
        "languages": {"jpn": "Japanese"},
        "flag": "\U0001f1ef\U0001f1f5",
        "flags": {"png": "https://flagcdn.com/w320/jp.png", "svg": "https://flagcdn.com/jp.svg"},
    }


@pytest.fixture
def flat_chile():
    return {
        "name": "Chile",
        "capital": "Santiago",
        "region": "Americas",
        "population": "19116201",
        "coordinates": {"latitude": -30.0, "longitude": -71.0},
        "currency": "Chilean peso",
        "languages": ["Spanish"],
    }


@pytest.fixture
def base_payload():
    return [
        {"name": "France", "region": "Europe", "population": 67000000},
        {"name": "Palau", "region": "Oceania", "population": 18000},
    ]


@pytest.fixture
def write_config(tmp_path):
    """Write a config whose only source is a local JSON file with the given payload."""

    def _write(payload, **run):
        data_path = tmp_path / "countries.json"
        data_path.write_text(json.dumps(payload), encoding="utf-8")
        cfg = {
            "run": {"display_policy": "show_all", "log_level": "WARNING", **run},
            "active_source": "local",
            "sources": [{"id": "local", "type": "file_json", "file": {"path": "countries.json"}}],
        }
        cfg_path = tmp_path / "explorer.json"
        cfg_path.write_text(json.dumps(cfg), encoding="utf-8")
        return cfg_path

    return _write


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in (
        "COUNTRY_EXPLORER_CONFIG",
        "COUNTRY_EXPLORER_SOURCE",
        "COUNTRY_EXPLORER_DISPLAY_POLICY",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
