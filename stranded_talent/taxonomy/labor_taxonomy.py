"""
Labor-market taxonomy for the stranded-talent dataset.

Four fixed vocabularies describe every dataset row and every selection:
  - ``Region``          — the *where*: MSA category of the worker.
  - ``Cohort``          — the *who*: which stranded definition is being viewed.
  - ``EDUCATION_ORDER`` — credential levels, lowest first.
  - ``AGE_GROUPS``      — age brackets, youngest first.

``SectorCategory`` groups the open NAICS-2 sector vocabulary into the handful
of buckets the recommendation templates are written for.  ``SECTOR_RULES`` is
the ordered (predicate, category) table used to assign a bucket; the first
matching rule wins and ``SectorCategory.OTHER`` is the mandatory default.

Usage example::

    from stranded_talent.taxonomy.labor_taxonomy import Cohort, classify_sector

    classify_sector("Health Care and Social Assistance")  # SectorCategory.HEALTHCARE

This module has NO imports from any other ``stranded_talent`` package.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum


class Region(StrEnum):
    """MSA category used as the geography dimension."""

    NASHVILLE = "Nashville"
    MEMPHIS = "Memphis"
    KNOXVILLE = "Knoxville"
    CHATTANOOGA = "Chattanooga"
    OTHER_MSA = "Other MSA"
    """Any metropolitan statistical area outside the four named metros."""

    RURAL = "Rural"
    """Counties outside every MSA."""

    ALL = "All"
    """Wildcard: matches every row regardless of its region."""


# Regions a row can actually carry (the wildcard is selection-only).
DATA_REGIONS: tuple[Region, ...] = tuple(r for r in Region if r is not Region.ALL)


class Cohort(StrEnum):
    """Stranded-worker definition whose weight drives the breakdowns."""

    LOW_WAGE = "Low Wage"
    UNDEREMPLOYED = "Underemployed"
    STALLED = "Stalled"
    ALL_STRANDED = "All Stranded"
    """Sum of the three weights above; overlapping workers are counted once per definition."""


class SectorCategory(StrEnum):
    """Recommendation bucket for a free-text NAICS-2 sector label."""

    MANUFACTURING = "manufacturing"
    HEALTHCARE = "healthcare"
    RETAIL_FOOD = "retail_food"
    CONSTRUCTION = "construction"
    PROFESSIONAL = "professional"
    """Professional services, finance, insurance and information."""

    EDUCATION = "education"
    OTHER = "other"


EDUCATION_ORDER: tuple[str, ...] = (
    "Less than HS",
    "HS diploma/GED",
    "Some college",
    "Associate's degree",
    "Bachelor's degree",
    "Graduate degree",
)

AGE_GROUPS: tuple[str, ...] = ("18-24", "25-34", "35-44", "45-54", "55+")

# Partial credential level used by the college-completion rule.
SOME_COLLEGE_LABEL = "Some college"

# Sector labels excluded from the sector selector.
EXCLUDED_SECTOR_LABELS = frozenset({"", "Other", "NA"})

# Occupation keywords that make a self-employment strategy relevant.
ENTREPRENEURSHIP_KEYWORDS: tuple[str, ...] = (
    "electrician",
    "plumber",
    "carpenter",
    "welder",
    "mechanics",
    "machinist",
    "painter",
    "hvac",
    "roofer",
    "mason",
    "cook",
    "chef",
    "baker",
    "barber",
    "hairdresser",
    "landscap",
    "repairer",
    "installer",
)


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    """Return a case-sensitive substring predicate over ``keywords``."""

    def predicate(label: str) -> bool:
        return any(keyword in label for keyword in keywords)

    return predicate


# Evaluated top to bottom; first match wins.
SECTOR_RULES: tuple[tuple[Callable[[str], bool], SectorCategory], ...] = (
    (_contains_any("Manufacturing"), SectorCategory.MANUFACTURING),
    (_contains_any("Health"), SectorCategory.HEALTHCARE),
    (_contains_any("Retail", "Accommodation", "Food"), SectorCategory.RETAIL_FOOD),
    (_contains_any("Construction"), SectorCategory.CONSTRUCTION),
    (
        _contains_any("Professional", "Finance", "Information", "Insurance", "Scientific"),
        SectorCategory.PROFESSIONAL,
    ),
    (_contains_any("Educational", "Education"), SectorCategory.EDUCATION),
)


def classify_sector(label: str) -> SectorCategory:
    """Map a NAICS-2 sector label to its recommendation bucket.

    Args:
        label: Free-text sector label, e.g. ``"Health Care and Social Assistance"``.

    Returns:
        The category of the first matching rule in ``SECTOR_RULES``, or
        ``SectorCategory.OTHER`` when nothing matches.
    """
    for predicate, category in SECTOR_RULES:
        if predicate(label):
            return category
    return SectorCategory.OTHER


def order_index(label: str, ordering: tuple[str, ...]) -> int:
    """Position of ``label`` in ``ordering``; unmapped labels sort after every known one."""
    try:
        return ordering.index(label)
    except ValueError:
        return len(ordering)


_REGION_PHRASES: dict[Region, str] = {
    Region.OTHER_MSA: "smaller Tennessee metros",
    Region.RURAL: "rural Tennessee",
    Region.ALL: "Tennessee",
}


def region_display_name(region: str) -> str:
    """Human-readable region phrase for narrative text.

    Named metros render as ``"<name> MSA"``; the catch-all categories and the
    wildcard get statewide phrasing.
    """
    try:
        return _REGION_PHRASES.get(Region(region), f"{region} MSA")
    except ValueError:
        return str(region)
