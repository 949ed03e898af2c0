"""
Export helpers for spreadsheet and manual analysis.

All functions write to disk and return the written ``Path``.
They accept generic ``list[dict]`` data to stay decoupled from
specific view shapes.

CSV exports are flat (no nested dicts) so they load directly in Excel,
Power BI or pandas without any pre-processing step.

``flatten_breakdowns_for_export()`` is the main adapter function: it converts
the three ordered breakdowns of a ``DashboardView`` into one row per
(dimension, label) with the selection attached as columns.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from stranded_talent.aggregation.breakdown import BreakdownDimension
from stranded_talent.session import DashboardView
from stranded_talent.utils.numbers import safe_rate

BREAKDOWN_EXPORT_FIELDS = [
    "region", "sector", "cohort", "dimension", "rank", "label", "weight", "share",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_breakdowns_for_export(view: DashboardView) -> list[dict]:
    """Flatten a view's breakdowns into one row per (dimension, label).

    Each row contains ``region``, ``sector``, ``cohort`` (selection),
    ``dimension`` (education / age / occupation), ``rank`` (1-based position
    in the ordered breakdown), ``label``, ``weight`` and ``share`` of the
    dimension total (``None`` when the total is zero).

    Args:
        view: Dashboard view from ``derive_view()``.

    Returns:
        List of flat row dicts, dimensions in education → age → occupation order.
    """
    state = view.state
    rows: list[dict] = []
    for dimension in BreakdownDimension:
        entries = view.breakdowns.entries(dimension)
        total = view.breakdowns.total(dimension)
        for rank, (label, weight) in enumerate(entries, start=1):
            share = safe_rate(weight, total)
            rows.append(
                {
                    "region":    str(state.region),
                    "sector":    state.sector,
                    "cohort":    str(state.cohort),
                    "dimension": str(dimension),
                    "rank":      rank,
                    "label":     label,
                    "weight":    round(weight, 4),
                    "share":     round(share, 4) if share is not None else None,
                }
            )
    return rows


def build_view_payload(view: DashboardView) -> dict:
    """Structured JSON payload: selection, stats, breakdowns and recommendations."""
    state = view.state
    stats = view.stats
    return {
        "selection": state.model_dump(mode="json"),
        "stats": {
            "total":         stats.total,
            "low_wage":      stats.low_wage,
            "underemployed": stats.underemployed,
            "stalled":       stats.stalled,
            "stranded_rate": stats.stranded_rate,
        },
        "breakdowns": {
            str(dimension): [
                {"label": label, "weight": weight}
                for label, weight in view.breakdowns.entries(dimension)
            ]
            for dimension in BreakdownDimension
        },
        "target_pool": view.target_pool,
        "recommendations": [
            {"title": rec.title, "body": rec.body} for rec in view.recommendations
        ],
    }
