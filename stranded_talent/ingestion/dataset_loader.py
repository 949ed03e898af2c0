"""
Dataset loader for the precomputed stranded-talent summary table.

Formats (detected by extension)
-------------------------------
  .json        — Array of row objects.
  .csv / .tsv  — Delimited text with a header row.  The delimiter of a
                 ``.csv`` file is sniffed (comma or tab).

Column names
------------
Source extracts use several spellings for the same field.  Every accepted
spelling is listed in ``FIELD_ALIASES``; the first alias present in a row wins.
For example ``msa_category``, ``region`` and ``geography`` all populate
``LaborRow.region``.

Coercion rules
--------------
  weights   — blank, ``"NA"``, non-numeric or non-finite → 0.0; negative → 0.0 (counted
              and logged once per load).
  sector / occupation — blank → ``"Other"``.
  region / education / age — blank → ``"Unknown"``.

Failure policy
--------------
A missing file, unsupported extension or parse error is logged at ERROR and
an EMPTY tuple is returned.  The dashboard then renders all-zero stats rather
than failing the session.
"""

from __future__ import annotations

import csv
import json
import logging
import math
from pathlib import Path
from typing import Any

from stranded_talent.models.row import LaborRow

logger = logging.getLogger(__name__)

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "region": ("msa_category", "region", "geography", "msa"),
    "sector": ("NAICS2_NAME", "naics2_name", "sector", "industry"),
    "total_weight": ("n_weighted", "total_weight", "total"),
    "low_wage_weight": ("n_weighted_low_wage", "low_wage_weight", "low_wage"),
    "underemployed_weight": (
        "n_weighted_underemployed", "underemployed_weight", "underemployed",
    ),
    "stalled_weight": ("n_weighted_stalled", "stalled_weight", "stalled"),
    "education_label": ("education_level_label", "education_label", "education"),
    "occupation_label": (
        "soc_2019_5_acs_name", "occupation_label", "occupation", "soc_name",
    ),
    "age_group": ("age_group", "age_bracket", "age"),
}

_WEIGHT_FIELDS = frozenset({
    "total_weight", "low_wage_weight", "underemployed_weight", "stalled_weight",
})

_LABEL_DEFAULTS: dict[str, str] = {
    "region": "Unknown",
    "sector": "Other",
    "education_label": "Unknown",
    "occupation_label": "Other",
    "age_group": "Unknown",
}

_MISSING_TOKENS = frozenset({"", "NA", "N/A", "NaN", "nan", "null", "None"})

SUPPORTED_SUFFIXES = frozenset({".json", ".csv", ".tsv"})


def load_rows(path: Path | str) -> tuple[LaborRow, ...]:
    """Load and normalize the dataset at ``path``.

    Args:
        path: JSON, CSV or TSV file.

    Returns:
        Normalized rows in file order; empty on any load failure.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        logger.error(
            "Unsupported dataset format '%s' for %s (expected one of %s)",
            suffix, path, sorted(SUPPORTED_SUFFIXES),
        )
        return ()

    try:
        if suffix == ".json":
            records = _read_json(path)
        else:
            records = _read_delimited(path, delimiter="\t" if suffix == ".tsv" else None)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, csv.Error, ValueError) as exc:
        logger.error("Failed to load dataset %s: %s", path, exc)
        return ()

    rows, clamped = normalize_records(records)
    if clamped:
        logger.warning("Clamped %d negative weight value(s) to 0 in %s", clamped, path.name)
    logger.info("Loaded %d dataset rows from %s", len(rows), path.name)
    return rows


def normalize_records(records: list[dict[str, Any]]) -> tuple[tuple[LaborRow, ...], int]:
    """Map raw record dicts onto ``LaborRow``.

    Args:
        records: Parsed JSON objects or CSV ``DictReader`` rows.

    Returns:
        ``(rows, clamped)`` where ``clamped`` counts negative weights reset to 0.
    """
    rows: list[LaborRow] = []
    clamped = 0
    for record in records:
        values: dict[str, Any] = {}
        for field_name, aliases in FIELD_ALIASES.items():
            raw = _first_present(record, aliases)
            if field_name in _WEIGHT_FIELDS:
                weight = _coerce_weight(raw)
                if weight < 0:
                    clamped += 1
                    weight = 0.0
                values[field_name] = weight
            else:
                values[field_name] = _coerce_label(raw, _LABEL_DEFAULTS[field_name])
        rows.append(LaborRow(**values))
    return tuple(rows), clamped


# ── Private helpers ────────────────────────────────────────────────────────────


def _read_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of row objects, got {type(data).__name__}.")
    return [item for item in data if isinstance(item, dict)]


def _read_delimited(path: Path, delimiter: str | None) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8", newline="") as f:
        if delimiter is None:
            sample = f.readline()
            f.seek(0)
            delimiter = "\t" if sample.count("\t") > sample.count(",") else ","
        reader = csv.DictReader(f, delimiter=delimiter)
        if reader.fieldnames is None:
            raise ValueError(f"Dataset file is empty or has no header row: {path}")
        return [dict(row) for row in reader]


def _first_present(record: dict[str, Any], aliases: tuple[str, ...]) -> Any:
    """Value of the first alias present and non-missing in ``record``."""
    for alias in aliases:
        value = record.get(alias)
        if value is None:
            continue
        if isinstance(value, str) and value.strip() in _MISSING_TOKENS:
            continue
        return value
    return None


def _coerce_weight(raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(str(raw).strip().replace(",", ""))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def _coerce_label(raw: Any, default: str) -> str:
    if raw is None:
        return default
    label = str(raw).strip()
    return label or default
