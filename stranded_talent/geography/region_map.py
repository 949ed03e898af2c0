"""
County → region lookup for the map collaborator.

The dashboard does not render county geometry itself.  A map component asks
this module two questions:

  - ``counties_for_region(mapping, region, counties)`` — which counties to
    highlight for the selected region.
  - ``region_for_county(mapping, county)`` — which region a clicked county
    selects.

Counties missing from the mapping file belong to ``Region.RURAL``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from stranded_talent.taxonomy.labor_taxonomy import DATA_REGIONS, Region

logger = logging.getLogger(__name__)


def load_county_mapping(path: Path | str) -> dict[str, Region]:
    """Load a ``{"County": "Region"}`` JSON object.

    Args:
        path: Path to the mapping file.

    Returns:
        County name → ``Region``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not an object or a value is not a data region.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"County mapping file not found: {path}")

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"County mapping must be a JSON object: {path}")

    valid = {str(r) for r in DATA_REGIONS}
    mapping: dict[str, Region] = {}
    bad: list[str] = []
    for county, region in raw.items():
        if region not in valid:
            bad.append(f"{county}={region!r}")
            continue
        mapping[str(county)] = Region(region)

    if bad:
        raise ValueError(
            f"{len(bad)} county mapping value(s) are not valid regions: {', '.join(bad[:10])}"
        )

    logger.info("Loaded %d county → region mappings from %s", len(mapping), path.name)
    return mapping


def region_for_county(mapping: dict[str, Region], county: str) -> Region:
    """Region selected by clicking ``county``; unmapped counties are rural."""
    return mapping.get(county, Region.RURAL)


def counties_for_region(
    mapping: dict[str, Region],
    region: Region,
    counties: Iterable[str],
) -> list[str]:
    """Counties to highlight for ``region``, in the order of ``counties``.

    ``Region.ALL`` highlights every county.
    """
    if region == Region.ALL:
        return list(counties)
    return [c for c in counties if region_for_county(mapping, c) == region]
