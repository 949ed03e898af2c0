"""
Tests for the cohort aggregator.

What we test
------------
1. compute_stats sums all four weights and ignores the cohort.
2. cohort_weight: All Stranded is the literal sum of the three weights.
3. The education, age and occupation totals always agree.
4. Education / age follow the taxonomy order; unmapped labels go last in
   first-seen order.
5. Occupation is weight-descending, zero weights dropped, ties first-seen.
6. Same input → same output.
7. Row order never changes the scoped sums or the breakdown weights.
"""

from __future__ import annotations

import random

import pytest

from stranded_talent.aggregation.breakdown import (
    BreakdownDimension,
    Breakdowns,
    CohortStats,
    WeightTable,
    cohort_weight,
    compute_breakdowns,
    compute_stats,
    order_by_taxonomy,
    order_by_weight,
)
from stranded_talent.aggregation.scope import filter_scope
from stranded_talent.taxonomy.labor_taxonomy import AGE_GROUPS, EDUCATION_ORDER, Cohort, Region


class TestComputeStats:
    def test_sums_all_weights(self, sample_rows):
        stats = compute_stats(sample_rows[:3])
        assert stats.total == pytest.approx(600.0)
        assert stats.low_wage == pytest.approx(110.0)
        assert stats.underemployed == pytest.approx(55.0)
        assert stats.stalled == pytest.approx(28.0)

    def test_empty_is_all_zero(self):
        stats = compute_stats([])
        assert stats == CohortStats()
        assert stats.stranded_rate is None

    def test_stranded_rate_is_low_wage_share(self, sample_rows):
        stats = compute_stats(sample_rows[:2])
        assert stats.stranded_rate == pytest.approx(50.0 / 300.0)

    def test_count_for_each_cohort(self):
        stats = CohortStats(total=100.0, low_wage=10.0, underemployed=5.0, stalled=3.0)
        assert stats.count_for(Cohort.LOW_WAGE) == 10.0
        assert stats.count_for(Cohort.UNDEREMPLOYED) == 5.0
        assert stats.count_for(Cohort.STALLED) == 3.0
        assert stats.count_for(Cohort.ALL_STRANDED) == 18.0



def _permutations(rows, seeds=(1, 7, 42)):
    yield list(reversed(rows))
    yield rows[3:] + rows[:3]
    for seed in seeds:
        shuffled = list(rows)
        random.Random(seed).shuffle(shuffled)
        yield shuffled


class TestRowOrderIndependence:
    @pytest.mark.parametrize(
        "region, sector",
        [(Region.ALL, "Manufacturing"), (Region.NASHVILLE, "Manufacturing"), (Region.ALL, "Utilities")],
    )
    def test_scoped_stats_unchanged(self, sample_rows, region, sector):
        expected = compute_stats(filter_scope(sample_rows, region, sector))
        for permuted in _permutations(sample_rows):
            stats = compute_stats(filter_scope(permuted, region, sector))
            assert stats.total == pytest.approx(expected.total)
            assert stats.low_wage == pytest.approx(expected.low_wage)
            assert stats.underemployed == pytest.approx(expected.underemployed)
            assert stats.stalled == pytest.approx(expected.stalled)

    @pytest.mark.parametrize("cohort", list(Cohort))
    def test_breakdown_weights_unchanged(self, sample_rows, cohort):
        expected = compute_breakdowns(sample_rows, cohort)
        for permuted in _permutations(sample_rows):
            bd = compute_breakdowns(permuted, cohort)
            for dimension in BreakdownDimension:
                assert bd.total(dimension) == pytest.approx(expected.total(dimension))
                assert dict(bd.entries(dimension)) == pytest.approx(
                    dict(expected.entries(dimension))
                )
            # Taxonomy-ordered dimensions keep their label order too.
            assert [label for label, _ in bd.education] == [
                label for label, _ in expected.education
            ]
            assert [label for label, _ in bd.age] == [label for label, _ in expected.age]

class TestCohortWeight:
    @pytest.mark.parametrize(
        "cohort, expected",
        [
            (Cohort.LOW_WAGE, 10.0),
            (Cohort.UNDEREMPLOYED, 5.0),
            (Cohort.STALLED, 3.0),
            (Cohort.ALL_STRANDED, 18.0),
        ],
    )
    def test_per_cohort(self, row_factory, cohort, expected):
        assert cohort_weight(row_factory(), cohort) == pytest.approx(expected)

    def test_all_stranded_breakdown_uses_sum(self, row_factory):
        bd = compute_breakdowns([row_factory()], Cohort.ALL_STRANDED)
        assert bd.education == (("HS diploma/GED", 18.0),)
        assert bd.age == (("25-34", 18.0),)
        assert bd.occupation == (("Machinists", 18.0),)


class TestComputeBreakdowns:
    @pytest.mark.parametrize("cohort", list(Cohort))
    def test_dimension_totals_agree(self, sample_rows, cohort):
        bd = compute_breakdowns(sample_rows, cohort)
        edu = bd.total(BreakdownDimension.EDUCATION)
        assert bd.total(BreakdownDimension.AGE) == pytest.approx(edu)
        assert bd.total(BreakdownDimension.OCCUPATION) == pytest.approx(edu)

    def test_empty_rows(self):
        bd = compute_breakdowns([], Cohort.LOW_WAGE)
        assert bd == Breakdowns()

    def test_education_follows_taxonomy_with_unmapped_last(self, row_factory):
        rows = [
            row_factory(education_label="Graduate degree"),
            row_factory(education_label="Unknown"),
            row_factory(education_label="Less than HS"),
            row_factory(education_label="Doctorate"),
            row_factory(education_label="Some college"),
        ]
        labels = [label for label, _ in compute_breakdowns(rows, Cohort.LOW_WAGE).education]
        assert labels == [
            "Less than HS", "Some college", "Graduate degree", "Unknown", "Doctorate",
        ]

    def test_age_follows_taxonomy(self, row_factory):
        rows = [row_factory(age_group=g) for g in ("55+", "18-24", "35-44")]
        labels = [label for label, _ in compute_breakdowns(rows, Cohort.STALLED).age]
        assert labels == ["18-24", "35-44", "55+"]

    def test_occupation_descending_without_zeros(self, row_factory):
        rows = [
            row_factory(occupation_label="Cashiers", low_wage_weight=5.0),
            row_factory(occupation_label="Cooks", low_wage_weight=0.0),
            row_factory(occupation_label="Welders", low_wage_weight=20.0),
            row_factory(occupation_label="Cashiers", low_wage_weight=10.0),
        ]
        bd = compute_breakdowns(rows, Cohort.LOW_WAGE)
        assert bd.occupation == (("Welders", 20.0), ("Cashiers", 15.0))

    def test_zero_weight_labels_stay_in_education_and_age(self, row_factory):
        rows = [row_factory(low_wage_weight=0.0)]
        bd = compute_breakdowns(rows, Cohort.LOW_WAGE)
        assert bd.education == (("HS diploma/GED", 0.0),)
        assert bd.age == (("25-34", 0.0),)
        assert bd.occupation == ()

    def test_deterministic(self, sample_rows):
        first = compute_breakdowns(sample_rows, Cohort.ALL_STRANDED)
        second = compute_breakdowns(sample_rows, Cohort.ALL_STRANDED)
        assert first == second


class TestOrdering:
    def test_order_by_taxonomy_idempotent(self):
        entries = [("55+", 1.0), ("Unknown", 2.0), ("18-24", 3.0)]
        once = order_by_taxonomy(entries, AGE_GROUPS)
        assert order_by_taxonomy(list(once), AGE_GROUPS) == once

    def test_order_by_taxonomy_unmapped_keep_first_seen_order(self):
        entries = [("B", 1.0), ("A", 1.0), ("HS diploma/GED", 1.0)]
        ordered = order_by_taxonomy(entries, EDUCATION_ORDER)
        assert [label for label, _ in ordered] == ["HS diploma/GED", "B", "A"]

    def test_order_by_weight_ties_keep_first_seen(self):
        entries = [("First", 5.0), ("Big", 9.0), ("Second", 5.0)]
        assert order_by_weight(entries) == (("Big", 9.0), ("First", 5.0), ("Second", 5.0))

    def test_order_by_weight_idempotent(self):
        once = order_by_weight([("a", 1.0), ("b", 3.0), ("c", 0.0), ("d", 2.0)])
        assert order_by_weight(list(once)) == once


class TestWeightTable:
    def test_accumulates_in_first_seen_order(self):
        table = WeightTable()
        table.add("b", 1.0)
        table.add("a", 2.0)
        table.add("b", 3.0)
        assert table.items() == [("b", 4.0), ("a", 2.0)]
        assert table.total() == pytest.approx(6.0)
        assert len(table) == 2
        assert "a" in table

    def test_get_missing_is_zero(self):
        assert WeightTable().get("missing") == 0.0


class TestBreakdownsHelpers:
    _BD = Breakdowns(
        education=(("HS diploma/GED", 30.0), ("Some college", 10.0)),
        age=(("25-34", 40.0),),
        occupation=(("Machinists", 25.0), ("Welders", 15.0)),
    )

    def test_weight_of(self):
        assert self._BD.weight_of(BreakdownDimension.OCCUPATION, "Welders") == 15.0
        assert self._BD.weight_of(BreakdownDimension.OCCUPATION, "Cooks") == 0.0
        assert self._BD.weight_of(BreakdownDimension.OCCUPATION, None) == 0.0

    def test_max_weight(self):
        assert self._BD.max_weight(BreakdownDimension.EDUCATION) == 30.0
        assert Breakdowns().max_weight(BreakdownDimension.AGE) == 0.0

    def test_entries_by_dimension_name(self):
        assert self._BD.entries("age") == (("25-34", 40.0),)
