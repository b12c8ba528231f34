import pytest

from country_explorer.errors import SourceUnavailableError
from country_explorer.pipeline import DisplayPolicy
from country_explorer.records import FilterCriteria
from country_explorer.state import (
    ExplorerState,
    FetchStatus,
    begin_fetch,
    build_view,
    ensure_loaded,
    fetch_failed,
    with_criteria,
)


class FakeSource:
    source_id = "fake"

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error:
            raise SourceUnavailableError(self.source_id, self.error)
        return self.payload


def test_fetch_happens_once(base_payload):
    source = FakeSource(base_payload)
    state = ensure_loaded(ExplorerState(), source)
    assert state.status is FetchStatus.READY
    assert [r.name for r in state.base] == ["France", "Palau"]

    again = ensure_loaded(with_criteria(state, FilterCriteria(search_text="pa")), source)
    assert source.calls == 1
    assert again.base == state.base


def test_failed_fetch_is_not_retried():
    source = FakeSource(error="connection refused")
    state = ensure_loaded(ExplorerState(), source)
    assert state.status is FetchStatus.FAILED
    assert state.error == "[fake] connection refused"

    ensure_loaded(state, source)
    assert source.calls == 1


def test_payload_with_wrong_shape_fails():
    state = ensure_loaded(ExplorerState(), FakeSource({"unexpected": True}))
    assert state.status is FetchStatus.FAILED


def test_illegal_transitions():
    with pytest.raises(RuntimeError):
        fetch_failed(ExplorerState(), "boom")
    loading = begin_fetch(ExplorerState())
    with pytest.raises(RuntimeError):
        begin_fetch(loading)


def test_view_while_loading_and_failed():
    loading = begin_fetch(ExplorerState())
    view = build_view(loading)
    assert view.loading and view.visible == () and view.error is None

    failed = fetch_failed(loading, "offline")
    view = build_view(failed)
    assert not view.loading
    assert view.error == "offline"
    assert view.visible == ()


def test_show_all_policy(base_payload):
    state = ensure_loaded(ExplorerState(), FakeSource(base_payload))
    view = build_view(state, DisplayPolicy.SHOW_ALL)
    assert view.show_results
    assert not view.is_active
    assert [r.name for r in view.visible] == ["France", "Palau"]
    assert view.total == 2


def test_require_filter_policy(base_payload):
    state = ensure_loaded(ExplorerState(), FakeSource(base_payload))
    view = build_view(state, DisplayPolicy.REQUIRE_FILTER)
    assert not view.show_results
    assert view.visible == ()

    view = build_view(with_criteria(state, FilterCriteria(region="Europe")), DisplayPolicy.REQUIRE_FILTER)
    assert view.show_results
    assert [r.name for r in view.visible] == ["France"]


def test_with_criteria_returns_new_snapshot():
    state = ExplorerState()
    updated = with_criteria(state, FilterCriteria(search_text="x"))
    assert state.criteria == FilterCriteria()
    assert updated is not state
