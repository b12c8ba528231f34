from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .pipeline import DisplayPolicy
from .sources.base import Source
from .sources.factory import build_source

REPO_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = REPO_ROOT / "configs" / "explorer.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


@dataclass(frozen=True)
class ExplorerConfig:
    sources: list[dict[str, Any]]
    active_source: str
    timeout_seconds: int = 20
    max_retries: int = 1
    display_policy: DisplayPolicy = DisplayPolicy.SHOW_ALL
    log_level: str = "INFO"
    base_dir: Path = field(default=REPO_ROOT)

    def source_ids(self) -> list[str]:
        return [str(s.get("id")) for s in self.sources]

    def active_source_cfg(self) -> dict[str, Any]:
        for s in self.sources:
            if s.get("id") == self.active_source:
                return s
        raise ConfigError(
            f"Unknown source '{self.active_source}'. Available: {', '.join(self.source_ids())}"
        )

    def with_overrides(
        self,
        *,
        active_source: str | None = None,
        display_policy: str | None = None,
    ) -> "ExplorerConfig":
        """Apply command-line overrides on top of file and environment settings."""
        return ExplorerConfig(
            sources=self.sources,
            active_source=active_source or self.active_source,
            timeout_seconds=self.timeout_seconds,
            max_retries=self.max_retries,
            display_policy=_parse_policy(display_policy) if display_policy else self.display_policy,
            log_level=self.log_level,
            base_dir=self.base_dir,
        )


def _parse_policy(value: str) -> DisplayPolicy:
    try:
        return DisplayPolicy(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(p.value for p in DisplayPolicy)
        raise ConfigError(f"display_policy must be one of: {allowed}") from exc


def _positive_int(run_cfg: dict[str, Any], key: str, default: int) -> int:
    raw = run_cfg.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"run.{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigError(f"run.{key} must be >= 1")
    return value


def resolve_config_path(path: Path | str | None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = _get_env("COUNTRY_EXPLORER_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def parse_config(cfg: dict[str, Any], *, base_dir: Path = REPO_ROOT) -> ExplorerConfig:
    if not isinstance(cfg, dict):
        raise ConfigError("Configuration must be a JSON object")

    sources = cfg.get("sources") or []
    if not isinstance(sources, list) or len(sources) == 0:
        raise ConfigError("config.sources must be a non-empty list")
    for s in sources:
        if not isinstance(s, dict) or not s.get("id"):
            raise ConfigError("Each entry in config.sources must be an object with an 'id'")

    run_cfg = cfg.get("run") or {}
    active = _get_env("COUNTRY_EXPLORER_SOURCE") or cfg.get("active_source") or sources[0]["id"]
    policy_raw = _get_env("COUNTRY_EXPLORER_DISPLAY_POLICY") or run_cfg.get("display_policy") or "show_all"
    log_level = str(_get_env("LOG_LEVEL") or run_cfg.get("log_level") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")

    config = ExplorerConfig(
        sources=sources,
        active_source=str(active),
        timeout_seconds=_positive_int(run_cfg, "timeout_seconds", 20),
        max_retries=_positive_int(run_cfg, "max_retries", 1),
        display_policy=_parse_policy(policy_raw),
        log_level=log_level,
        base_dir=base_dir,
    )
    # Fail early on a dangling active_source.
    config.active_source_cfg()
    return config


def load_config(path: Path | str | None = None) -> ExplorerConfig:
    config_path = resolve_config_path(path)
    if not config_path.exists():
        raise ConfigError(f"Config not found at {config_path}")
    try:
        cfg = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse config {config_path}: {exc}") from exc
    # Relative file sources resolve against the config file location.
    base_dir = config_path.resolve().parent
    return parse_config(cfg, base_dir=base_dir)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_active_source(config: ExplorerConfig) -> Source:
    return build_source(
        config.active_source_cfg(),
        base_dir=config.base_dir,
        timeout_seconds=config.timeout_seconds,
        max_retries=config.max_retries,
    )
