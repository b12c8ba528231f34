from __future__ import annotations

"""
Immutable session snapshot for the explorer.

Every transition returns a new ExplorerState; the base list is only ever
set by fetch_succeeded and is never rewritten by filtering.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .errors import SourceUnavailableError
from .pipeline import (
    DisplayPolicy,
    PipelineView,
    build_base_list,
    compute_visible_list,
    is_active_filter,
)
from .records import CountryRecord, FilterCriteria
from .sources.base import Source
from .utils import Timer

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ExplorerState:
    status: FetchStatus = FetchStatus.IDLE
    base: tuple[CountryRecord, ...] = field(default_factory=tuple)
    error: str | None = None
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    rejected: int = 0

    @property
    def needs_fetch(self) -> bool:
        return self.status is FetchStatus.IDLE


def _require(state: ExplorerState, expected: FetchStatus, action: str) -> None:
    if state.status is not expected:
        raise RuntimeError(f"Cannot {action} while {state.status.value}")


def begin_fetch(state: ExplorerState) -> ExplorerState:
    _require(state, FetchStatus.IDLE, "start fetch")
    return replace(state, status=FetchStatus.LOADING, error=None)


def fetch_succeeded(
    state: ExplorerState,
    payload: Any,
    extract_cfg: dict[str, Any] | None = None,
) -> ExplorerState:
    _require(state, FetchStatus.LOADING, "complete fetch")
    base = build_base_list(payload, extract_cfg)
    return replace(state, status=FetchStatus.READY, base=base.records, rejected=base.rejected, error=None)


def fetch_failed(state: ExplorerState, message: str) -> ExplorerState:
    _require(state, FetchStatus.LOADING, "fail fetch")
    return replace(state, status=FetchStatus.FAILED, error=message)


def with_criteria(state: ExplorerState, criteria: FilterCriteria) -> ExplorerState:
    return replace(state, criteria=criteria)


def ensure_loaded(state: ExplorerState, source: Source) -> ExplorerState:
    """Fetch exactly once: only an IDLE state triggers the source."""
    if not state.needs_fetch:
        return state

    state = begin_fetch(state)
    t = Timer.start_new()
    try:
        payload = source.fetch()
    except SourceUnavailableError as exc:
        logger.error("Country source unavailable after %d ms: %s", t.elapsed_ms(), exc)
        return fetch_failed(state, str(exc))

    try:
        state = fetch_succeeded(state, payload)
    except ValueError as exc:
        # Payload was JSON but not a country list.
        logger.error("Country payload rejected: %s", exc)
        return fetch_failed(state, str(exc))

    logger.info(
        "Loaded %d countries (%d rejected) in %d ms",
        len(state.base),
        state.rejected,
        t.elapsed_ms(),
    )
    return state


def build_view(state: ExplorerState, policy: DisplayPolicy = DisplayPolicy.SHOW_ALL) -> PipelineView:
    active = is_active_filter(state.criteria)
    loading = state.status in (FetchStatus.IDLE, FetchStatus.LOADING)

    if state.status is not FetchStatus.READY:
        return PipelineView(
            visible=(),
            is_active=active,
            show_results=False,
            loading=loading,
            error=state.error,
            total=0,
        )

    show = active or policy is DisplayPolicy.SHOW_ALL
    visible = compute_visible_list(state.base, state.criteria) if show else ()
    return PipelineView(
        visible=visible,
        is_active=active,
        show_results=show,
        loading=False,
        error=None,
        total=len(state.base),
    )
