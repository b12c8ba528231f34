from __future__ import annotations

"""Map raw country objects from any supported source onto CountryRecord."""

import logging
import math
from typing import Any, Iterable

from .errors import MalformedRecordError
from .records import CountryRecord

logger = logging.getLogger(__name__)


def _clean_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def _str_items(values: Iterable[Any]) -> tuple[str, ...]:
    out: list[str] = []
    for v in values:
        text = _clean_str(v)
        if text is not None:
            out.append(text)
    return tuple(out)


def _coerce_name(raw: dict[str, Any]) -> str:
    value = raw.get("name")
    if isinstance(value, dict):
        # v3: {"common": "France", "official": "French Republic"}
        name = _clean_str(value.get("common")) or _clean_str(value.get("official"))
    else:
        name = _clean_str(value)
    if name is None:
        raise MalformedRecordError("Country record has no usable name", raw_name=value)
    return name


def _coerce_capital(value: Any) -> str | None:
    if isinstance(value, list):
        items = _str_items(value)
        return items[0] if items else None
    return _clean_str(value)


def _coerce_number(value: Any) -> float | None:
    # bool is an int subclass and never a measurement.
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        try:
            num = float(value.replace(",", "").strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(num) or math.isinf(num) or num < 0:
        return None
    return num


def _coerce_population(value: Any) -> int | None:
    num = _coerce_number(value)
    return None if num is None else int(num)


def _coerce_coordinates(raw: dict[str, Any]) -> tuple[float, float] | None:
    value = raw.get("latlng")
    if value is None:
        value = raw.get("coordinates")

    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            return None
        lat, lng = value
    elif isinstance(value, dict):
        lat = value.get("latitude", value.get("lat"))
        lng = value.get("longitude", value.get("lng"))
    else:
        return None

    if isinstance(lat, bool) or isinstance(lng, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return None
    return (float(lat), float(lng))


def _coerce_str_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        text = _clean_str(value)
        return (text,) if text else ()
    if isinstance(value, (list, tuple)):
        return _str_items(value)
    return ()


def _format_currency(name: str | None, code: str | None) -> str | None:
    if name and code:
        return f"{name} ({code})"
    return name or code


def _coerce_currency(raw: dict[str, Any]) -> str | None:
    value = raw.get("currencies")
    if value is None:
        value = raw.get("currency")

    if isinstance(value, str):
        return _clean_str(value)
    if isinstance(value, list):
        # v2: [{"code": "EUR", "name": "Euro", "symbol": "€"}]
        for entry in value:
            if isinstance(entry, dict):
                text = _format_currency(_clean_str(entry.get("name")), _clean_str(entry.get("code")))
                if text:
                    return text
            elif _clean_str(entry):
                return _clean_str(entry)
        return None
    if isinstance(value, dict):
        # v3: {"EUR": {"name": "Euro", "symbol": "€"}}
        for code, entry in value.items():
            name = _clean_str(entry.get("name")) if isinstance(entry, dict) else None
            text = _format_currency(name, _clean_str(code))
            if text:
                return text
    return None


def _coerce_languages(value: Any) -> tuple[str, ...]:
    if isinstance(value, dict):
        # v3: {"fra": "French"}
        return _str_items(value.values())
    if isinstance(value, (list, tuple)):
        out: list[str] = []
        for entry in value:
            if isinstance(entry, dict):
                text = _clean_str(entry.get("name"))
            else:
                text = _clean_str(entry)
            if text:
                out.append(text)
        return tuple(out)
    return _coerce_str_list(value)


def _is_url(value: Any) -> bool:
    text = _clean_str(value)
    return text is not None and text.lower().startswith(("http://", "https://"))


def _coerce_flag_url(raw: dict[str, Any]) -> str | None:
    # v3 puts an emoji in "flag" and URLs under "flags".
    for key in ("flag", "flagUrl", "flag_url"):
        if _is_url(raw.get(key)):
            return raw[key].strip()

    flags = raw.get("flags")
    if isinstance(flags, dict):
        for key in ("svg", "png"):
            if _is_url(flags.get(key)):
                return flags[key].strip()
    elif isinstance(flags, list):
        for entry in flags:
            if _is_url(entry):
                return entry.strip()
    return None


def normalize_record(raw: Any) -> CountryRecord:
    """
    Build one CountryRecord from a raw source object.

    Only the name is mandatory; every other field degrades to absent when
    its shape is unknown.
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError(f"Country record must be an object, got {type(raw).__name__}")

    return CountryRecord(
        name=_coerce_name(raw),
        capital=_coerce_capital(raw.get("capital")),
        region=_clean_str(raw.get("region")),
        subregion=_clean_str(raw.get("subregion")),
        population=_coerce_population(raw.get("population")),
        area=_coerce_number(raw.get("area")),
        coordinates=_coerce_coordinates(raw),
        borders=_coerce_str_list(raw.get("borders")),
        timezones=_coerce_str_list(raw.get("timezones")),
        currency=_coerce_currency(raw),
        languages=_coerce_languages(raw.get("languages")),
        flag_url=_coerce_flag_url(raw),
    )


def normalize_many(raws: Iterable[Any]) -> tuple[list[CountryRecord], int]:
    """Normalize a batch, dropping malformed records. Returns (records, rejected)."""
    records: list[CountryRecord] = []
    rejected = 0
    for i, raw in enumerate(raws):
        try:
            records.append(normalize_record(raw))
        except MalformedRecordError as exc:
            rejected += 1
            logger.warning("Dropping country record at index %d: %s", i, exc)
    return records, rejected
