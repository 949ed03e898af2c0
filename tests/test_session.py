"""
Tests for dashboard view derivation.

What we test
------------
1. Stats equal the sums over the scoped rows, independent of cohort.
2. Breakdown totals agree with each other.
3. The occupation autofills from the top of the breakdown.
4. Recommendations follow the derived profile.
5. Re-deriving with the same inputs yields an identical view.
6. Dataset handles and the configured initial selection.
"""

from __future__ import annotations

import json

import pytest

from stranded_talent.aggregation.breakdown import BreakdownDimension
from stranded_talent.config import DashboardConfig
from stranded_talent.models.selection import (
    SelectCohort,
    SelectionState,
    SelectOccupation,
    reduce_selection,
)
from stranded_talent.session import (
    DatasetHandle,
    LoadState,
    derive_view,
    initial_selection,
    open_dataset,
)
from stranded_talent.taxonomy.labor_taxonomy import Cohort, Region


class TestDeriveView:
    def test_stats_sum_scoped_rows(self, nashville_view):
        stats = nashville_view.stats
        assert nashville_view.scoped_rows == 2
        assert stats.total == pytest.approx(300.0)
        assert stats.low_wage == pytest.approx(50.0)
        assert stats.stranded_rate == pytest.approx(50.0 / 300.0)

    def test_stats_ignore_cohort(self, sample_rows, nashville_view):
        state = reduce_selection(nashville_view.state, SelectCohort(Cohort.STALLED))
        assert derive_view(sample_rows, state).stats == nashville_view.stats

    @pytest.mark.parametrize("cohort", list(Cohort))
    def test_breakdown_totals_agree(self, sample_rows, cohort):
        view = derive_view(sample_rows, SelectionState(cohort=cohort))
        bd = view.breakdowns
        edu = bd.total(BreakdownDimension.EDUCATION)
        assert bd.total(BreakdownDimension.AGE) == pytest.approx(edu)
        assert bd.total(BreakdownDimension.OCCUPATION) == pytest.approx(edu)

    def test_memphis_rows_excluded_from_nashville(self, nashville_view):
        labels = [label for label, _ in nashville_view.breakdowns.education]
        assert "Less than HS" not in labels

    def test_occupation_autofill(self, nashville_view):
        assert nashville_view.state.target_occupation == "Assemblers and fabricators"
        assert nashville_view.target_pool == pytest.approx(70.0)

    def test_recommendations_follow_profile(self, nashville_view):
        # Mature (70 of 88 aged 45+), mostly "Some college", manufacturing.
        assert [rec.title for rec in nashville_view.recommendations] == [
            "Strategy: Experienced-Worker Reskilling",
            "Strategy: Stackable Credential Ladders",
            "Strategy: Wage-Boosting Skills Training",
            "Strategy: College Completion Support",
            "Strategy: Internal Mobility Pathways",
        ]

    def test_trade_occupation_adds_entrepreneurship(self, sample_rows, nashville_view):
        state = reduce_selection(nashville_view.state, SelectOccupation("Machinists"))
        view = derive_view(sample_rows, state)
        assert view.target_pool == pytest.approx(18.0)
        assert view.recommendations[-1].title == (
            "Strategy: Entrepreneurship & Freelance Transition"
        )

    def test_occupation_outside_scope_has_zero_pool(self, sample_rows):
        state = SelectionState(region=Region.NASHVILLE, target_occupation="Cashiers")
        view = derive_view(sample_rows, state)
        assert view.state.target_occupation == "Cashiers"
        assert view.target_pool == 0.0

    def test_rederive_is_identical(self, sample_rows, nashville_view):
        again = derive_view(sample_rows, SelectionState(region=Region.NASHVILLE))
        assert again == nashville_view
        assert derive_view(sample_rows, nashville_view.state) == nashville_view

    def test_empty_dataset(self, empty_view):
        assert empty_view.scoped_rows == 0
        assert empty_view.stats.total == 0.0
        assert empty_view.stats.stranded_rate is None
        assert empty_view.state.target_occupation is None
        assert empty_view.target_pool == 0.0
        assert len(empty_view.recommendations) == 4


class TestDatasetHandle:
    def test_default_is_loading(self):
        handle = DatasetHandle()
        assert handle.status == LoadState.LOADING
        assert not handle.is_ready
        assert handle.rows == ()

    def test_ready(self, sample_rows):
        handle = DatasetHandle.ready(sample_rows)
        assert handle.is_ready
        assert handle.rows == sample_rows

    def test_open_dataset(self, tmp_path, sample_records):
        path = tmp_path / "data.json"
        path.write_text(json.dumps(sample_records), encoding="utf-8")
        handle = open_dataset(path)
        assert handle.is_ready
        assert len(handle.rows) == 2

    def test_open_missing_dataset_is_ready_and_empty(self, tmp_path):
        handle = open_dataset(tmp_path / "missing.json")
        assert handle.is_ready
        assert handle.rows == ()


class TestInitialSelection:
    def test_uses_configured_defaults(self):
        config = DashboardConfig(
            default_region="Memphis", default_sector="Construction", default_cohort="Stalled"
        )
        state = initial_selection(config)
        assert state.region == Region.MEMPHIS
        assert state.sector == "Construction"
        assert state.cohort == Cohort.STALLED
        assert state.target_occupation is None

    def test_plain_defaults(self):
        assert initial_selection(DashboardConfig()) == SelectionState()
