from __future__ import annotations

from typing import Any, Protocol


class Source(Protocol):
    source_id: str

    def fetch(self) -> list[Any]: ...
