"""
Cohort aggregation: top-line stats and ordered breakdowns over scoped rows.

Two independent folds run over the same scoped rows:

1.  ``compute_stats(rows)`` sums all four weights.  It ignores the selected
    cohort and feeds the top-line counters.

2.  ``compute_breakdowns(rows, cohort)`` folds ONE per-row weight (chosen by
    ``cohort_weight``) into three label tables (education, age, occupation)
    and then orders each table:

        education  — position in ``EDUCATION_ORDER``
        age        — position in ``AGE_GROUPS``
        occupation — weight descending, zero-weight entries dropped

    Labels missing from an ordering table sort after every known label, in
    first-seen order.  Weight ties in the occupation table keep first-seen
    order.  Both guarantees come from Python's stable ``sorted()``.

All-stranded semantics
----------------------
``Cohort.ALL_STRANDED`` contributes ``low_wage + underemployed + stalled`` per
row.  Workers who qualify under several definitions are counted once per
definition; this is the dataset's published "all stranded" figure, not a
de-duplicated headcount.

Accumulation (``WeightTable``) and ordering (``order_by_taxonomy`` /
``order_by_weight``) are kept separate so each can be tested on its own.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from stranded_talent.models.row import LaborRow
from stranded_talent.taxonomy.labor_taxonomy import (
    AGE_GROUPS,
    EDUCATION_ORDER,
    Cohort,
    order_index,
)
from stranded_talent.utils.numbers import safe_rate

BreakdownEntries = tuple[tuple[str, float], ...]


class BreakdownDimension(StrEnum):
    EDUCATION = "education"
    AGE = "age"
    OCCUPATION = "occupation"


@dataclass(frozen=True)
class CohortStats:
    """Cohort-independent sums over the scoped rows.

    Attributes:
        total:         Sum of ``total_weight``.
        low_wage:      Sum of ``low_wage_weight``.
        underemployed: Sum of ``underemployed_weight``.
        stalled:       Sum of ``stalled_weight``.
    """

    total: float = 0.0
    low_wage: float = 0.0
    underemployed: float = 0.0
    stalled: float = 0.0

    @property
    def stranded_rate(self) -> float | None:
        """Low-wage share of all workers in scope; ``None`` when scope is empty."""
        return safe_rate(self.low_wage, self.total)

    def count_for(self, cohort: Cohort) -> float:
        """Top-line count for ``cohort`` using the same weighting as the breakdowns."""
        if cohort == Cohort.LOW_WAGE:
            return self.low_wage
        if cohort == Cohort.UNDEREMPLOYED:
            return self.underemployed
        if cohort == Cohort.STALLED:
            return self.stalled
        return self.low_wage + self.underemployed + self.stalled


class WeightTable:
    """Ordered label → summed weight map.

    ``add()`` is get-or-zero-then-add.  Iteration order is first-seen order;
    no sorting happens here.
    """

    def __init__(self) -> None:
        self._sums: dict[str, float] = {}

    def add(self, label: str, weight: float) -> None:
        self._sums[label] = self._sums.get(label, 0.0) + weight

    def get(self, label: str) -> float:
        return self._sums.get(label, 0.0)

    def items(self) -> list[tuple[str, float]]:
        return list(self._sums.items())

    def total(self) -> float:
        return sum(self._sums.values())

    def __len__(self) -> int:
        return len(self._sums)

    def __contains__(self, label: object) -> bool:
        return label in self._sums


@dataclass(frozen=True)
class Breakdowns:
    """Ordered (label, weight) sequences for the selected cohort."""

    education: BreakdownEntries = ()
    age: BreakdownEntries = ()
    occupation: BreakdownEntries = ()

    def entries(self, dimension: BreakdownDimension) -> BreakdownEntries:
        return getattr(self, BreakdownDimension(dimension).value)

    def total(self, dimension: BreakdownDimension) -> float:
        return sum(weight for _, weight in self.entries(dimension))

    def weight_of(self, dimension: BreakdownDimension, label: str | None) -> float:
        """Weight for ``label`` in ``dimension``; 0.0 when absent."""
        for entry_label, weight in self.entries(dimension):
            if entry_label == label:
                return weight
        return 0.0

    def max_weight(self, dimension: BreakdownDimension) -> float:
        """Largest weight in ``dimension`` (bar scaling); 0.0 when empty."""
        return max((weight for _, weight in self.entries(dimension)), default=0.0)


# ── Folds ─────────────────────────────────────────────────────────────────────


def cohort_weight(row: LaborRow, cohort: Cohort) -> float:
    """Per-row contribution of ``row`` to the ``cohort`` breakdowns."""
    if cohort == Cohort.LOW_WAGE:
        return row.low_wage_weight
    if cohort == Cohort.UNDEREMPLOYED:
        return row.underemployed_weight
    if cohort == Cohort.STALLED:
        return row.stalled_weight
    return row.low_wage_weight + row.underemployed_weight + row.stalled_weight


def compute_stats(rows: Iterable[LaborRow]) -> CohortStats:
    """Sum all four weights over ``rows``.  Empty input yields all zeros."""
    total = low_wage = underemployed = stalled = 0.0
    for row in rows:
        total += row.total_weight
        low_wage += row.low_wage_weight
        underemployed += row.underemployed_weight
        stalled += row.stalled_weight
    return CohortStats(
        total=total,
        low_wage=low_wage,
        underemployed=underemployed,
        stalled=stalled,
    )


def compute_breakdowns(rows: Iterable[LaborRow], cohort: Cohort) -> Breakdowns:
    """Fold the cohort weight of every row into three ordered breakdowns.

    Args:
        rows:   Scoped rows (output of ``filter_scope``).
        cohort: Which weight each row contributes.

    Returns:
        ``Breakdowns`` with education and age in taxonomy order and occupation
        in descending weight order.  Empty input yields empty tuples.
    """
    education = WeightTable()
    age = WeightTable()
    occupation = WeightTable()

    for row in rows:
        weight = cohort_weight(row, cohort)
        education.add(row.education_label, weight)
        age.add(row.age_group, weight)
        occupation.add(row.occupation_label, weight)

    return Breakdowns(
        education=order_by_taxonomy(education.items(), EDUCATION_ORDER),
        age=order_by_taxonomy(age.items(), AGE_GROUPS),
        occupation=order_by_weight(occupation.items()),
    )


# ── Ordering ──────────────────────────────────────────────────────────────────


def order_by_taxonomy(
    entries: list[tuple[str, float]],
    ordering: tuple[str, ...],
) -> BreakdownEntries:
    """Sort entries by their label's position in ``ordering``; unmapped labels last."""
    return tuple(sorted(entries, key=lambda entry: order_index(entry[0], ordering)))


def order_by_weight(entries: list[tuple[str, float]]) -> BreakdownEntries:
    """Drop zero-weight entries and sort the rest by weight descending."""
    kept = [entry for entry in entries if entry[1] > 0]
    return tuple(sorted(kept, key=lambda entry: -entry[1]))
