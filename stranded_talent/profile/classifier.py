"""
Profile classifier: derive narrative signals from the current breakdowns.

Signals and thresholds
----------------------
    young_share          = (18-24 + 25-34) / age total          young  if > 0.50
    mature_share         = (45-54 + 55+)   / age total          mature if > 0.50
    low_education_share  = (Less than HS + HS diploma/GED)
                           / education total                    low    if > 0.60
    high_education_share = (Bachelor's + Graduate degree)
                           / education total                    high   if > 0.40
    some_college_share   = Some college / education total       flag   if > 0.15

Every share uses its own breakdown's total.  A zero total makes every share
in that breakdown 0.0 and every flag False.

The sector category comes from ``classify_sector()`` in the taxonomy module.
"""

from __future__ import annotations

from dataclasses import dataclass

from stranded_talent.aggregation.breakdown import BreakdownDimension, Breakdowns
from stranded_talent.taxonomy.labor_taxonomy import (
    AGE_GROUPS,
    EDUCATION_ORDER,
    SOME_COLLEGE_LABEL,
    SectorCategory,
    classify_sector,
)
from stranded_talent.utils.numbers import safe_share

YOUNG_THRESHOLD = 0.5
MATURE_THRESHOLD = 0.5
LOW_EDUCATION_THRESHOLD = 0.6
HIGH_EDUCATION_THRESHOLD = 0.4
SOME_COLLEGE_THRESHOLD = 0.15

_YOUNG_BRACKETS = AGE_GROUPS[:2]
_MATURE_BRACKETS = AGE_GROUPS[-2:]
_LOW_CREDENTIALS = EDUCATION_ORDER[:2]
_HIGH_CREDENTIALS = EDUCATION_ORDER[-2:]


@dataclass(frozen=True)
class ProfileSignals:
    """Shares and flags that pick the recommendation branches.

    Attributes:
        young_share:          Weight share of the two youngest age brackets.
        mature_share:         Weight share of the two oldest age brackets.
        low_education_share:  Weight share of the two lowest credentials.
        high_education_share: Weight share of the two highest credentials.
        some_college_share:   Weight share of the partial-credential level.
        sector_category:      Recommendation bucket for the selected sector.
    """

    young_share: float = 0.0
    mature_share: float = 0.0
    low_education_share: float = 0.0
    high_education_share: float = 0.0
    some_college_share: float = 0.0
    sector_category: SectorCategory = SectorCategory.OTHER

    @property
    def is_young_cohort(self) -> bool:
        return self.young_share > YOUNG_THRESHOLD

    @property
    def is_mature_cohort(self) -> bool:
        return self.mature_share > MATURE_THRESHOLD

    @property
    def is_low_education(self) -> bool:
        return self.low_education_share > LOW_EDUCATION_THRESHOLD

    @property
    def is_high_education(self) -> bool:
        return self.high_education_share > HIGH_EDUCATION_THRESHOLD

    @property
    def has_some_college(self) -> bool:
        return self.some_college_share > SOME_COLLEGE_THRESHOLD


def classify_profile(breakdowns: Breakdowns, sector: str) -> ProfileSignals:
    """Compute all profile signals for the current breakdowns.

    Args:
        breakdowns: Output of ``compute_breakdowns()`` for the active cohort.
        sector:     Selected sector label.

    Returns:
        ``ProfileSignals``; never raises on empty breakdowns.
    """
    age_total = breakdowns.total(BreakdownDimension.AGE)
    edu_total = breakdowns.total(BreakdownDimension.EDUCATION)

    return ProfileSignals(
        young_share=safe_share(
            _sum_labels(breakdowns, BreakdownDimension.AGE, _YOUNG_BRACKETS), age_total
        ),
        mature_share=safe_share(
            _sum_labels(breakdowns, BreakdownDimension.AGE, _MATURE_BRACKETS), age_total
        ),
        low_education_share=safe_share(
            _sum_labels(breakdowns, BreakdownDimension.EDUCATION, _LOW_CREDENTIALS),
            edu_total,
        ),
        high_education_share=safe_share(
            _sum_labels(breakdowns, BreakdownDimension.EDUCATION, _HIGH_CREDENTIALS),
            edu_total,
        ),
        some_college_share=safe_share(
            breakdowns.weight_of(BreakdownDimension.EDUCATION, SOME_COLLEGE_LABEL),
            edu_total,
        ),
        sector_category=classify_sector(sector),
    )


def _sum_labels(
    breakdowns: Breakdowns,
    dimension: BreakdownDimension,
    labels: tuple[str, ...],
) -> float:
    return sum(breakdowns.weight_of(dimension, label) for label in labels)
