from __future__ import annotations

import logging
from typing import Iterable

from .records import CountryRecord

logger = logging.getLogger(__name__)


def dedupe_by_name(records: Iterable[CountryRecord]) -> list[CountryRecord]:
    """Keep the first record for each name, in original order."""
    seen: set[str] = set()
    out: list[CountryRecord] = []
    dropped = 0
    for r in records:
        if r.name in seen:
            dropped += 1
            continue
        seen.add(r.name)
        out.append(r)
    if dropped:
        logger.info("Dropped %d duplicate country records", dropped)
    return out
