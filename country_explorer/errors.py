from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MalformedRecordError(Exception):
    message: str
    raw_name: object | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SourceUnavailableError(Exception):
    source_id: str
    message: str

    def __str__(self) -> str:
        return f"[{self.source_id}] {self.message}"


@dataclass(frozen=True)
class ConfigError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message
