#!/usr/bin/env python3
from __future__ import annotations

import streamlit as st

from country_explorer.config import ExplorerConfig, build_active_source, load_config, setup_logging
from country_explorer.errors import ConfigError
from country_explorer.pipeline import PipelineView, available_regions
from country_explorer.records import REGIONS, CountryRecord, FilterCriteria, PopulationBucket
from country_explorer.render import EMPTY_MESSAGE, card_fields, records_to_frame
from country_explorer.state import ExplorerState, build_view, ensure_loaded, with_criteria

# The explorer snapshot lives in session_state so the fetch runs once per session.
STATE_KEY = "explorer_state"

POPULATION_LABELS = {
    PopulationBucket.NONE: "All Populations",
    PopulationBucket.SMALL: "< 1M",
    PopulationBucket.MEDIUM: "1M - 50M",
    PopulationBucket.LARGE: "> 50M",
}


def _load_settings() -> ExplorerConfig | None:
    try:
        return load_config()
    except ConfigError as exc:
        st.error("Configuration could not be loaded.")
        st.caption(f"Details: {exc}")
        return None


def _region_options(state: ExplorerState) -> list[str]:
    present = available_regions(state.base)
    extra = [r for r in present if r not in REGIONS]
    return ["", *REGIONS, *extra]


def _render_card(record: CountryRecord) -> None:
    with st.container(border=True):
        col_flag, col_info = st.columns([1, 3])
        if record.flag_url:
            col_flag.image(record.flag_url, caption=f"{record.name} flag", width=160)
        col_info.subheader(record.name)
        for label, value in card_fields(record).items():
            col_info.markdown(f"**{label}:** {value}")


def _render_results(view: PipelineView, as_table: bool) -> None:
    if view.loading:
        st.info("Loading countries...")
        return
    if view.error:
        st.error(view.error)
        return
    if not view.show_results:
        st.caption("Search for any country, or pick a region or population range.")
        return
    if not view.visible:
        st.write(EMPTY_MESSAGE)
        return

    st.write(f"Countries: {len(view.visible)} of {view.total}")
    if as_table:
        st.dataframe(records_to_frame(view.visible), use_container_width=True, hide_index=True)
        return
    for record in view.visible:
        _render_card(record)


def main() -> None:
    st.set_page_config(page_title="Country Explorer", layout="wide")
    st.title("Country Explorer")

    config = _load_settings()
    if config is None:
        st.stop()
    setup_logging(config.log_level)

    state: ExplorerState = st.session_state.get(STATE_KEY, ExplorerState())
    if state.needs_fetch:
        try:
            source = build_active_source(config)
        except ConfigError as exc:
            st.error(f"Invalid source configuration: {exc}")
            st.stop()
        with st.spinner("Fetching countries..."):
            state = ensure_loaded(state, source)
        st.session_state[STATE_KEY] = state

    st.sidebar.header("Filters")
    search = st.sidebar.text_input("SEARCH FOR ANY COUNTRY", placeholder="Country name")
    region = st.sidebar.selectbox(
        "Region",
        _region_options(state),
        format_func=lambda r: r or "All Regions",
    )
    bucket = st.sidebar.selectbox(
        "Population",
        list(POPULATION_LABELS.keys()),
        format_func=lambda b: POPULATION_LABELS[b],
    )
    as_table = st.sidebar.toggle("Table view", value=False)

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Source: `{config.active_source}`")
    if state.rejected:
        st.sidebar.caption(f"Skipped {state.rejected} records without a name.")

    state = with_criteria(state, FilterCriteria.from_inputs(search, region, bucket.value))
    st.session_state[STATE_KEY] = state
    _render_results(build_view(state, config.display_policy), as_table)


if __name__ == "__main__":
    main()
