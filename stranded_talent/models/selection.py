"""
Dashboard selection state and its reducer.

``SelectionState`` is the only mutable-in-spirit value in a session, and it is
modelled as a frozen Pydantic model: every user interaction produces a NEW
state through ``reduce_selection(state, action)``.  Derived views (scope
filter, breakdowns, classifier signals, recommendations) are recomputed from
``(rows, state)`` on every transition; nothing is patched incrementally.

Actions
-------
  SelectRegion(region)          — map click or region selector.
  SelectSector(sector)          — sector dropdown.
  SelectCohort(cohort)          — cohort circle click.
  SelectOccupation(occupation)  — occupation card click.
  ToggleRecommendation(index)   — expand/collapse a recommendation card.

Changing region, sector or cohort keeps the current ``target_occupation``;
``autofill_occupation()`` only fills it when it is still ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from stranded_talent.taxonomy.labor_taxonomy import Cohort, Region

DEFAULT_SECTOR = "Manufacturing"


class SelectionState(BaseModel):
    """Current analyst selection.

    Attributes:
        region: Geography filter; ``Region.ALL`` matches every row.
        sector: Exact NAICS-2 sector label to scope to.
        cohort: Stranded definition driving the breakdown weights.
        target_occupation: Focus occupation for recommendations, or ``None``
            until data has loaded.
        expanded_recommendation: Index of the open recommendation card, or
            ``None`` when all are collapsed.
    """

    model_config = ConfigDict(frozen=True)

    region: Region = Region.ALL
    sector: str = DEFAULT_SECTOR
    cohort: Cohort = Cohort.ALL_STRANDED
    target_occupation: Optional[str] = None
    expanded_recommendation: Optional[int] = 0


# ── Actions ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SelectRegion:
    region: Region


@dataclass(frozen=True)
class SelectSector:
    sector: str


@dataclass(frozen=True)
class SelectCohort:
    cohort: Cohort


@dataclass(frozen=True)
class SelectOccupation:
    occupation: Optional[str]


@dataclass(frozen=True)
class ToggleRecommendation:
    index: int


SelectionAction = Union[
    SelectRegion, SelectSector, SelectCohort, SelectOccupation, ToggleRecommendation
]


def reduce_selection(state: SelectionState, action: SelectionAction) -> SelectionState:
    """Apply one user action and return the resulting state.

    Args:
        state:  Current selection.
        action: One of the action dataclasses above.

    Returns:
        A new ``SelectionState``; ``state`` itself is never modified.

    Raises:
        TypeError: If ``action`` is not a known action type.
    """
    if isinstance(action, SelectRegion):
        return state.model_copy(update={"region": Region(action.region)})
    if isinstance(action, SelectSector):
        return state.model_copy(update={"sector": action.sector})
    if isinstance(action, SelectCohort):
        return state.model_copy(update={"cohort": Cohort(action.cohort)})
    if isinstance(action, SelectOccupation):
        return state.model_copy(update={"target_occupation": action.occupation})
    if isinstance(action, ToggleRecommendation):
        expanded = None if state.expanded_recommendation == action.index else action.index
        return state.model_copy(update={"expanded_recommendation": expanded})
    raise TypeError(f"Unknown selection action: {action!r}")


def autofill_occupation(
    state: SelectionState,
    occupation_entries: tuple[tuple[str, float], ...],
) -> SelectionState:
    """Fill ``target_occupation`` with the top-ranked occupation when unset.

    Args:
        state:              Current selection.
        occupation_entries: Occupation breakdown, already sorted descending.

    Returns:
        ``state`` unchanged when an occupation is already chosen or the
        breakdown is empty; otherwise a copy focused on the first entry.
    """
    if state.target_occupation is not None or not occupation_entries:
        return state
    return state.model_copy(update={"target_occupation": occupation_entries[0][0]})
