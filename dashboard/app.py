"""
Stranded Talent — Streamlit Dashboard
=====================================

Interactive view over the precomputed Tennessee stranded-talent summary.
Reads the dataset configured in ``config/default.toml`` only; it never writes
anything except the downloaded brief.

App structure (4 sections, top to bottom)
-----------------------------------------
  1. Scope          — region picker (or county lookup) and sector selector,
                      total workers and stranded rate.
  2. Landscape      — cohort selector with per-cohort counts, age and
                      education bars, top occupations for the cohort.
  3. Occupation     — the ten largest occupations; clicking one focuses the
                      roadmap on it.
  4. Policy Roadmap — recommendations (click a title to expand), target-group
                      profile and the executive brief download.

Selection state
---------------
One frozen ``SelectionState`` lives in ``st.session_state["selection"]``.
Widgets never write it directly; every interaction dispatches an action
through ``reduce_selection`` and Streamlit's rerun then derives a fresh
``DashboardView`` from ``(rows, state)``.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="Stranded Talent Dashboard",
    layout="wide",
    initial_sidebar_state="expanded",
)

import pandas as pd

from dashboard.data_loader import load_counties, load_dataset
from stranded_talent.aggregation.scope import list_sectors
from stranded_talent.config import load_config, resolve_path
from stranded_talent.geography.region_map import counties_for_region, region_for_county
from stranded_talent.models.selection import (
    SelectCohort,
    SelectionAction,
    SelectionState,
    SelectOccupation,
    SelectRegion,
    SelectSector,
    ToggleRecommendation,
    reduce_selection,
)
from stranded_talent.recommendations.composer import GENERIC_OCCUPATION
from stranded_talent.reporting.brief import file_slug, render_brief_html
from stranded_talent.session import DatasetHandle, derive_view, initial_selection
from stranded_talent.taxonomy.labor_taxonomy import Cohort, Region, region_display_name
from stranded_talent.utils.logging import configure_logging
from stranded_talent.utils.numbers import format_count, format_rate

_STATE_KEY = "selection"
_COUNTY_PROMPT = "(pick a county)"
_COUNTY_KEY = "county_pick"

config = load_config()
configure_logging(config.logging)


# ── State helpers ─────────────────────────────────────────────────────────────

def _state() -> SelectionState:
    if _STATE_KEY not in st.session_state:
        st.session_state[_STATE_KEY] = initial_selection(config.dashboard)
    return st.session_state[_STATE_KEY]


def _apply(action: SelectionAction) -> None:
    st.session_state[_STATE_KEY] = reduce_selection(_state(), action)


def _dispatch(action: SelectionAction) -> None:
    """Reduce ``action`` into the session state and rerun the script."""
    _apply(action)
    st.rerun()


def _on_county_pick() -> None:
    county = st.session_state[_COUNTY_KEY]
    if county != _COUNTY_PROMPT:
        _apply(SelectRegion(region_for_county(counties, county)))
        st.session_state[_COUNTY_KEY] = _COUNTY_PROMPT


def _bar_frame(entries: tuple[tuple[str, float], ...], column: str) -> pd.DataFrame:
    """Ordered breakdown as a single-column frame indexed by label."""
    frame = pd.DataFrame(list(entries), columns=["label", column])
    # Keep breakdown order; st.bar_chart otherwise sorts the index.
    frame["label"] = pd.Categorical(
        frame["label"], categories=[label for label, _ in entries], ordered=True
    )
    return frame.set_index("label")


# ── Dataset ───────────────────────────────────────────────────────────────────

with st.spinner("Loading stranded-talent dataset..."):
    handle = DatasetHandle.ready(load_dataset(str(resolve_path(config.data.dataset_path))))

rows = handle.rows
counties = load_counties(str(resolve_path(config.data.county_mapping_path)))


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("Stranded Talent")
    st.caption("Tennessee workers whose skills outpace their pay or progress")
    st.divider()
    st.metric("Rows loaded", format_count(len(rows)))
    if not rows:
        st.error(f"No rows loaded from `{config.data.dataset_path}`.")
    if st.button("Clear cache", help="Force re-read of the dataset and county mapping."):
        st.cache_data.clear()
        st.rerun()


view = derive_view(rows, _state())
if view.state != _state():
    # Persist the occupation autofill so later cohort changes keep the focus.
    st.session_state[_STATE_KEY] = view.state
state = view.state
stats = view.stats
bd = view.breakdowns


# ══════════════════════════════════════════════════════════════════════════════
# Section 1: Scope
# ══════════════════════════════════════════════════════════════════════════════

st.header("1. Define Your Scope")

col_region, col_county, col_sector = st.columns(3)

with col_region:
    regions = list(Region)
    region_choice = st.selectbox(
        "Region",
        options=regions,
        index=regions.index(state.region),
        format_func=region_display_name,
    )
    if region_choice != state.region:
        _dispatch(SelectRegion(region_choice))

with col_county:
    county_names = sorted(counties)
    st.selectbox(
        "Or select by county",
        options=[_COUNTY_PROMPT] + county_names,
        key=_COUNTY_KEY,
        on_change=_on_county_pick,
        help="Counties not in the mapping belong to rural Tennessee.",
    )

with col_sector:
    sectors = list_sectors(rows)
    if state.sector not in sectors:
        sectors = [state.sector] + sectors
    sector_choice = st.selectbox("Industry sector", options=sectors, index=sectors.index(state.sector))
    if sector_choice != state.sector:
        _dispatch(SelectSector(sector_choice))

highlighted = counties_for_region(counties, state.region, county_names)
if state.region not in (Region.ALL, Region.RURAL) and highlighted:
    st.caption(f"Counties in {region_display_name(state.region)}: {', '.join(highlighted)}")

m1, m2 = st.columns(2)
m1.metric("Total workers", format_count(stats.total))
m2.metric("Stranded rate (low wage)", format_rate(stats.stranded_rate))


# ══════════════════════════════════════════════════════════════════════════════
# Section 2: Landscape
# ══════════════════════════════════════════════════════════════════════════════

st.header("2. The Stranded Landscape")

cohorts = list(Cohort)
cohort_counts = {cohort: stats.count_for(cohort) for cohort in cohorts}
cohort_choice = st.radio(
    "Cohort",
    options=cohorts,
    index=cohorts.index(state.cohort),
    horizontal=True,
    format_func=lambda c: f"{c} ({format_count(cohort_counts[c])})",
)
if cohort_choice != state.cohort:
    _dispatch(SelectCohort(cohort_choice))

col_age, col_edu, col_occ = st.columns(3)
with col_age:
    st.subheader("Age distribution")
    if bd.age:
        st.bar_chart(_bar_frame(bd.age, "workers"))
    else:
        st.info("No workers in scope.")
with col_edu:
    st.subheader("Education pipeline")
    if bd.education:
        st.bar_chart(_bar_frame(bd.education, "workers"))
    else:
        st.info("No workers in scope.")
with col_occ:
    st.subheader("Top occupations")
    top_landscape = bd.occupation[: config.dashboard.landscape_occupations]
    if top_landscape:
        for label, weight in top_landscape:
            st.write(f"**{label}**: {format_count(weight)}")
    else:
        st.info("No workers in scope.")


# ══════════════════════════════════════════════════════════════════════════════
# Section 3: Occupation selection
# ══════════════════════════════════════════════════════════════════════════════

st.header("3. Select Target Occupation")

selectable = bd.occupation[: config.dashboard.selectable_occupations]
if not selectable:
    st.info("No occupations in scope for this region and sector.")
else:
    grid = st.columns(min(5, len(selectable)))
    for i, (label, weight) in enumerate(selectable):
        with grid[i % len(grid)]:
            chosen = label == state.target_occupation
            if st.button(
                f"{label}\n\n{format_count(weight)} workers",
                key=f"occ_{i}",
                type="primary" if chosen else "secondary",
                use_container_width=True,
            ) and not chosen:
                _dispatch(SelectOccupation(label))


# ══════════════════════════════════════════════════════════════════════════════
# Section 4: Policy roadmap
# ══════════════════════════════════════════════════════════════════════════════

st.header("4. Policy Roadmap")

col_recs, col_profile = st.columns([2, 1])

with col_recs:
    for i, rec in enumerate(view.recommendations):
        is_open = state.expanded_recommendation == i
        marker = "▾" if is_open else "▸"
        if st.button(f"{marker} {rec.title}", key=f"rec_{i}", use_container_width=True):
            _dispatch(ToggleRecommendation(i))
        if is_open:
            st.info(rec.body)

with col_profile:
    st.subheader("Target group")
    st.write(f"**Region:** {region_display_name(state.region)}")
    st.write(f"**Sector:** {state.sector}")
    st.write(f"**Occupation:** {state.target_occupation or GENERIC_OCCUPATION}")
    st.write(f"**Cohort:** {state.cohort}")
    st.metric("Workers in pool", format_count(view.target_pool))

    today = date.today()
    st.download_button(
        "Download executive brief",
        data=render_brief_html(
            view,
            generated_on=today,
            auto_print=config.report.auto_print,
            footer=config.report.footer,
        ),
        file_name=f"brief_{file_slug(state.region)}_{file_slug(state.sector)}_{today}.html",
        mime="text/html",
        use_container_width=True,
    )
