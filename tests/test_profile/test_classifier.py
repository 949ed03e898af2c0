"""
Tests for the profile classifier.

What we test
------------
1. Shares use their own breakdown total; a zero total gives 0.0 shares and no
   flags.
2. Thresholds are strict (> not >=).
3. Sector category comes from the sector label.
"""

from __future__ import annotations

import pytest

from stranded_talent.aggregation.breakdown import Breakdowns
from stranded_talent.profile.classifier import ProfileSignals, classify_profile
from stranded_talent.taxonomy.labor_taxonomy import SectorCategory


def _bd(education=(), age=()) -> Breakdowns:
    return Breakdowns(education=tuple(education), age=tuple(age), occupation=())


class TestEmptyBreakdowns:
    def test_all_zero_and_no_flags(self):
        signals = classify_profile(Breakdowns(), "Manufacturing")
        assert signals.young_share == 0.0
        assert signals.mature_share == 0.0
        assert signals.low_education_share == 0.0
        assert signals.high_education_share == 0.0
        assert signals.some_college_share == 0.0
        assert not signals.is_young_cohort
        assert not signals.is_mature_cohort
        assert not signals.is_low_education
        assert not signals.is_high_education
        assert not signals.has_some_college

    def test_zero_age_total_sets_neither_age_flag(self):
        bd = _bd(
            education=[("Less than HS", 50.0)],
            age=[("18-24", 0.0), ("55+", 0.0)],
        )
        signals = classify_profile(bd, "Manufacturing")
        assert not signals.is_young_cohort
        assert not signals.is_mature_cohort
        assert signals.is_low_education


class TestAgeSignals:
    def test_young_cohort(self):
        bd = _bd(age=[("18-24", 30.0), ("25-34", 30.0), ("45-54", 40.0)])
        signals = classify_profile(bd, "Retail Trade")
        assert signals.young_share == pytest.approx(0.6)
        assert signals.is_young_cohort
        assert not signals.is_mature_cohort

    def test_mature_cohort(self):
        bd = _bd(age=[("25-34", 18.0), ("45-54", 70.0), ("55+", 12.0)])
        signals = classify_profile(bd, "Retail Trade")
        assert signals.mature_share == pytest.approx(0.82)
        assert signals.is_mature_cohort

    def test_exactly_half_is_not_young(self):
        bd = _bd(age=[("18-24", 50.0), ("35-44", 50.0)])
        assert not classify_profile(bd, "Retail Trade").is_young_cohort

    def test_unmapped_age_counts_in_total_only(self):
        bd = _bd(age=[("18-24", 40.0), ("Unknown", 60.0)])
        signals = classify_profile(bd, "Retail Trade")
        assert signals.young_share == pytest.approx(0.4)
        assert signals.mature_share == 0.0


class TestEducationSignals:
    def test_low_education(self):
        bd = _bd(education=[
            ("Less than HS", 40.0), ("HS diploma/GED", 30.0), ("Bachelor's degree", 30.0),
        ])
        signals = classify_profile(bd, "Construction")
        assert signals.low_education_share == pytest.approx(0.7)
        assert signals.is_low_education
        assert not signals.is_high_education

    def test_high_education(self):
        bd = _bd(education=[
            ("HS diploma/GED", 50.0), ("Bachelor's degree", 30.0), ("Graduate degree", 20.0),
        ])
        signals = classify_profile(bd, "Construction")
        assert signals.high_education_share == pytest.approx(0.5)
        assert signals.is_high_education
        assert not signals.is_low_education

    def test_some_college_flag(self):
        bd = _bd(education=[("Some college", 20.0), ("Associate's degree", 80.0)])
        signals = classify_profile(bd, "Construction")
        assert signals.some_college_share == pytest.approx(0.2)
        assert signals.has_some_college

    def test_some_college_at_threshold_is_not_flagged(self):
        bd = _bd(education=[("Some college", 15.0), ("Associate's degree", 85.0)])
        assert not classify_profile(bd, "Construction").has_some_college


class TestSectorCategory:
    def test_health_care_label(self):
        signals = classify_profile(Breakdowns(), "Health Care and Social Assistance")
        assert signals.sector_category == SectorCategory.HEALTHCARE

    def test_unmatched_label(self):
        signals = classify_profile(Breakdowns(), "Utilities")
        assert signals.sector_category == SectorCategory.OTHER

    def test_default_signals(self):
        assert ProfileSignals().sector_category == SectorCategory.OTHER
