"""
Numeric helpers shared by the classifier, composer and report surfaces.

Zero-denominator policy
-----------------------
Shares feeding the classifier use ``safe_share()`` and collapse to ``0.0``.
Rates shown to the analyst use ``safe_rate()`` and collapse to ``None``,
which every surface renders as ``"N/A"`` through ``format_rate()``.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded away from zero.

    Python's ``round()`` uses banker's rounding (``round(2.5) == 2``); the
    narrative percentages must read ``3`` there. Non-finite input gives ``0``.
    """
    if not math.isfinite(value):
        return 0
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))


def safe_share(part: float, whole: float) -> float:
    """``part / whole``, or ``0.0`` when ``whole`` is not positive."""
    if whole <= 0:
        return 0.0
    return part / whole


def safe_rate(numerator: float, denominator: float) -> float | None:
    """``numerator / denominator``, or ``None`` when the denominator is not positive."""
    if denominator <= 0:
        return None
    return numerator / denominator


def as_percent(share: float) -> int:
    """A 0–1 share as a whole-number percentage (round half up)."""
    return round_half_up(share * 100.0)


def format_rate(rate: float | None) -> str:
    """Render a rate as ``"37%"``, or ``"N/A"`` when undefined."""
    if rate is None:
        return "N/A"
    return f"{as_percent(rate)}%"


def format_count(value: float) -> str:
    """Render a weighted worker count with thousands separators, e.g. ``"12,345"``."""
    return f"{round_half_up(value):,}"
