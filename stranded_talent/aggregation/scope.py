"""
Scope filter: reduce the full dataset to the active (region, sector) selection.

Both dimensions are exact string matches.  ``Region.ALL`` is the only
wildcard; there is no "all sectors" option.  Row order is preserved so that
downstream first-seen tie-breaking stays deterministic.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from stranded_talent.models.row import LaborRow
from stranded_talent.taxonomy.labor_taxonomy import EXCLUDED_SECTOR_LABELS, Region


def filter_scope(
    rows: Iterable[LaborRow],
    region: str,
    sector: str,
) -> list[LaborRow]:
    """Return the rows inside the selected region and sector.

    Args:
        rows:   Full dataset.
        region: A ``Region`` value; ``Region.ALL`` disables the region test.
        sector: Exact sector label.

    Returns:
        Matching rows in original order.  May be empty.
    """
    match_all = region == Region.ALL
    return [
        row for row in rows
        if row.sector == sector and (match_all or row.region == region)
    ]


def list_sectors(rows: Sequence[LaborRow]) -> list[str]:
    """Sorted distinct sector labels offered in the sector selector."""
    return sorted({row.sector for row in rows} - EXCLUDED_SECTOR_LABELS)
