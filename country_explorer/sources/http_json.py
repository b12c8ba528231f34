from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any

import requests

from ..errors import SourceUnavailableError
from ..extract import unwrap_records
from ..utils import Timer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpJsonSource:
    source_id: str
    request_cfg: dict[str, Any]
    extract_cfg: dict[str, Any] | None
    timeout_seconds: int
    max_retries: int = 1

    def fetch(self) -> list[Any]:
        t = Timer.start_new()
        url = self.request_cfg["url"]
        logger.info("Fetching countries from %s", url)
        try:
            payload = self._fetch_with_retries()
            records = unwrap_records(payload, self.extract_cfg)
        except ValueError as exc:
            raise SourceUnavailableError(self.source_id, str(exc)) from exc
        logger.info("Fetched %d raw records from %s in %d ms", len(records), url, t.elapsed_ms())
        return records

    def _fetch_with_retries(self) -> Any:
        method = (self.request_cfg.get("method") or "GET").upper()
        url = self.request_cfg["url"]
        params = self.request_cfg.get("params")
        headers = self.request_cfg.get("headers")
        attempts = max(1, int(self.max_retries))

        last_exc: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                resp = requests.request(
                    method=method,
                    url=url,
                    params=params,
                    headers=headers,
                    timeout=self.timeout_seconds,
                )
                resp.raise_for_status()
                # Parse JSON with a clear message if it fails.
                try:
                    return resp.json()
                except (json.JSONDecodeError, ValueError) as je:
                    raise ValueError(f"Response is not valid JSON from {url}") from je
            except (requests.RequestException, ValueError) as exc:
                last_exc = exc
                if attempt < attempts:
                    logger.warning("Attempt %d/%d for %s failed: %s", attempt, attempts, url, exc)
                    time.sleep(min(2 ** (attempt - 1), 8))
                    continue
                break

        assert last_exc is not None
        raise SourceUnavailableError(self.source_id, str(last_exc)) from last_exc
