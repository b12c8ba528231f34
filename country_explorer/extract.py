from __future__ import annotations

from typing import Any


def _get_by_dotted_path(payload: Any, path: str) -> Any:
    """
    Traverse a JSON-like object using a dotted path like "a.b.c".
    Returns None if any segment is missing.
    """
    cur = payload
    if path == "":
        return cur
    for part in path.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return None
    return cur


def unwrap_records(payload: Any, extract_cfg: dict[str, Any] | None = None) -> list[Any]:
    """
    Return the list of raw country objects held by a response payload:
    - If extract_cfg provides record_path, the list found there is used.
    - A bare list is returned as-is.
    - An object with a "data" list yields that list.
    Anything else raises ValueError.
    """
    if extract_cfg and extract_cfg.get("record_path"):
        record_path = str(extract_cfg["record_path"])
        base = _get_by_dotted_path(payload, record_path)
        if not isinstance(base, list):
            raise ValueError(f"record_path '{record_path}' did not return a list")
        return base

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise ValueError(f"Expected a list of countries or an object with 'data', got {type(payload).__name__}")
