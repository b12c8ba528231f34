from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import SourceUnavailableError
from ..extract import unwrap_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileJsonSource:
    source_id: str
    file_path: Path
    extract_cfg: dict[str, Any] | None

    def fetch(self) -> list[Any]:
        logger.info("Reading countries from %s", self.file_path)
        try:
            payload = json.loads(self.file_path.read_text(encoding="utf-8"))
            return unwrap_records(payload, self.extract_cfg)
        except (OSError, ValueError) as exc:
            raise SourceUnavailableError(self.source_id, str(exc)) from exc
