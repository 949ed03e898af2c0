"""
Shared pytest fixtures for the Stranded Talent test suite.

Provides:
  - ``row_factory``: Builds a ``LaborRow`` from keyword overrides on top of a
    Nashville / Manufacturing baseline (10 low wage, 5 underemployed,
    3 stalled out of 100 workers).
  - ``sample_rows``: A small mixed dataset covering several regions, sectors
    and the excluded ``"NA"`` / ``"Other"`` sector labels.
  - ``sample_records``: The same kind of data as raw dicts using the source
    extract's column names, for loader tests.
  - ``nashville_view`` / ``empty_view``: Derived ``DashboardView`` objects for
    reporting and session tests.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from stranded_talent.models.row import LaborRow
from stranded_talent.models.selection import SelectionState
from stranded_talent.session import derive_view
from stranded_talent.taxonomy.labor_taxonomy import Region

_BASE_ROW: dict[str, Any] = {
    "region": "Nashville",
    "sector": "Manufacturing",
    "total_weight": 100.0,
    "low_wage_weight": 10.0,
    "underemployed_weight": 5.0,
    "stalled_weight": 3.0,
    "education_label": "HS diploma/GED",
    "occupation_label": "Machinists",
    "age_group": "25-34",
}


@pytest.fixture
def row_factory() -> Callable[..., LaborRow]:
    """Return a callable building ``LaborRow`` objects from overrides."""

    def _make(**overrides: Any) -> LaborRow:
        return LaborRow(**{**_BASE_ROW, **overrides})

    return _make


@pytest.fixture
def sample_rows(row_factory) -> tuple[LaborRow, ...]:
    """Seven rows; two of them are Nashville / Manufacturing."""
    return (
        row_factory(),
        row_factory(
            total_weight=200.0,
            low_wage_weight=40.0,
            underemployed_weight=20.0,
            stalled_weight=10.0,
            education_label="Some college",
            occupation_label="Assemblers and fabricators",
            age_group="45-54",
        ),
        row_factory(
            region="Memphis",
            total_weight=300.0,
            low_wage_weight=60.0,
            underemployed_weight=30.0,
            stalled_weight=15.0,
            education_label="Less than HS",
            age_group="18-24",
        ),
        row_factory(
            sector="Health Care and Social Assistance",
            total_weight=150.0,
            low_wage_weight=30.0,
            underemployed_weight=10.0,
            stalled_weight=5.0,
            education_label="Associate's degree",
            occupation_label="Nursing assistants",
            age_group="35-44",
        ),
        row_factory(
            region="Rural",
            sector="Retail Trade",
            total_weight=80.0,
            low_wage_weight=20.0,
            underemployed_weight=8.0,
            stalled_weight=4.0,
            education_label="Bachelor's degree",
            occupation_label="Cashiers",
            age_group="55+",
        ),
        row_factory(region="Knoxville", sector="NA", occupation_label="Other"),
        row_factory(region="Chattanooga", sector="Other", occupation_label="Other"),
    )


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """Raw records keyed by the source extract's column names."""
    return [
        {
            "msa_category": "Nashville",
            "NAICS2_NAME": "Manufacturing",
            "n_weighted": 100,
            "n_weighted_low_wage": 10,
            "n_weighted_underemployed": 5,
            "n_weighted_stalled": 3,
            "education_level_label": "HS diploma/GED",
            "soc_2019_5_acs_name": "Machinists",
            "age_group": "25-34",
        },
        {
            "msa_category": "Memphis",
            "NAICS2_NAME": "Construction",
            "n_weighted": 40.5,
            "n_weighted_low_wage": 12,
            "n_weighted_underemployed": 0,
            "n_weighted_stalled": 2,
            "education_level_label": "Less than HS",
            "soc_2019_5_acs_name": "Electricians",
            "age_group": "45-54",
        },
    ]


@pytest.fixture
def nashville_view(sample_rows):
    """Derived view for Nashville / Manufacturing / All Stranded.

    Scope holds two rows: Machinists (18 stranded) and Assemblers and
    fabricators (70 stranded), so the occupation autofills to the latter.
    """
    return derive_view(sample_rows, SelectionState(region=Region.NASHVILLE))


@pytest.fixture
def empty_view():
    """Derived view over an empty dataset."""
    return derive_view((), SelectionState())
