"""
Dashboard view derivation — the single recomputation entry point.

Every selection change calls ``derive_view(rows, state)``, which runs the
whole pipeline in one synchronous pass::

    filter_scope → compute_stats → compute_breakdowns → autofill_occupation
                 → classify_profile → compose_recommendations

and returns one frozen ``DashboardView``.  Callers (Streamlit app, CLI, report
renderer) only ever see a complete view; no intermediate aggregate is exposed.

Loading
-------
``DatasetHandle`` tracks whether the dataset has finished loading.  Until its
status is ``LoadState.READY`` no view is derived and the UI shows a loading
state.  A failed load still ends in ``READY`` with an empty row set, so the
dashboard renders zeros instead of an error page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from stranded_talent.aggregation.breakdown import (
    BreakdownDimension,
    Breakdowns,
    CohortStats,
    compute_breakdowns,
    compute_stats,
)
from stranded_talent.aggregation.scope import filter_scope
from stranded_talent.config import DashboardConfig
from stranded_talent.ingestion.dataset_loader import load_rows
from stranded_talent.models.row import LaborRow
from stranded_talent.models.selection import SelectionState, autofill_occupation
from stranded_talent.profile.classifier import ProfileSignals, classify_profile
from stranded_talent.recommendations.composer import (
    Recommendation,
    compose_recommendations,
)

logger = logging.getLogger(__name__)


class LoadState(StrEnum):
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class DatasetHandle:
    """Dataset plus its load status."""

    status: LoadState = LoadState.LOADING
    rows: tuple[LaborRow, ...] = field(default_factory=tuple)

    @property
    def is_ready(self) -> bool:
        return self.status == LoadState.READY

    @classmethod
    def ready(cls, rows: tuple[LaborRow, ...]) -> "DatasetHandle":
        return cls(status=LoadState.READY, rows=tuple(rows))


@dataclass(frozen=True)
class DashboardView:
    """Everything the UI and report need for one selection.

    Attributes:
        state:           Selection after occupation autofill.
        scoped_rows:     Number of rows inside the region/sector scope.
        stats:           Cohort-independent top-line sums.
        breakdowns:      Ordered education / age / occupation breakdowns.
        signals:         Profile classifier output.
        recommendations: Composed strategy list.
        target_pool:     Cohort weight of the target occupation (0 if absent).
    """

    state: SelectionState
    scoped_rows: int
    stats: CohortStats
    breakdowns: Breakdowns
    signals: ProfileSignals
    recommendations: tuple[Recommendation, ...]
    target_pool: float


def derive_view(rows: tuple[LaborRow, ...], state: SelectionState) -> DashboardView:
    """Recompute every derived value for ``state``.

    Args:
        rows:  Full, immutable dataset.
        state: Current selection.

    Returns:
        A complete ``DashboardView``.  Deriving twice from equal inputs yields
        equal views.
    """
    scoped = filter_scope(rows, state.region, state.sector)
    stats = compute_stats(scoped)
    breakdowns = compute_breakdowns(scoped, state.cohort)
    state = autofill_occupation(state, breakdowns.occupation)
    signals = classify_profile(breakdowns, state.sector)
    recommendations = compose_recommendations(signals, state)

    logger.debug(
        "Derived view region=%s sector=%s cohort=%s rows=%d recs=%d",
        state.region, state.sector, state.cohort, len(scoped), len(recommendations),
    )

    return DashboardView(
        state=state,
        scoped_rows=len(scoped),
        stats=stats,
        breakdowns=breakdowns,
        signals=signals,
        recommendations=tuple(recommendations),
        target_pool=breakdowns.weight_of(
            BreakdownDimension.OCCUPATION, state.target_occupation
        ),
    )


def open_dataset(path: Path | str) -> DatasetHandle:
    """Load the dataset at ``path`` and mark it ready.

    A failed load yields a ready handle with no rows (see module docstring).
    """
    return DatasetHandle.ready(load_rows(path))


def initial_selection(config: DashboardConfig) -> SelectionState:
    """Session-start selection built from the configured defaults."""
    return SelectionState(
        region=config.default_region,
        sector=config.default_sector,
        cohort=config.default_cohort,
    )
