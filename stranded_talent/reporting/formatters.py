"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept a ``DashboardView`` (or pieces of one) and return
plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Share column
------------
``format_breakdown_table()`` shows each entry's share of the breakdown total
next to its weight.  An empty breakdown prints a placeholder line instead of
a table; shares of a zero total print as ``N/A``.
"""

from __future__ import annotations

import textwrap

from stranded_talent.aggregation.breakdown import BreakdownDimension
from stranded_talent.recommendations.composer import GENERIC_OCCUPATION, Recommendation
from stranded_talent.session import DashboardView
from stranded_talent.taxonomy.labor_taxonomy import region_display_name
from stranded_talent.utils.numbers import format_count, format_rate, safe_rate


# ── Scope summary ─────────────────────────────────────────────────────────────


def format_scope_summary(view: DashboardView) -> str:
    """Format the selection header and top-line counters.

    Example::

        === Stranded Talent Summary ===
          Region:      Nashville MSA
          Sector:      Manufacturing
          Cohort:      All Stranded
          Occupation:  Machinists

          Total workers      12,500
          Low wage            3,100
          ...
    """
    state = view.state
    stats = view.stats
    lines: list[str] = []
    lines.append("")
    lines.append("=== Stranded Talent Summary ===")
    lines.append(f"  Region:      {region_display_name(state.region)}")
    lines.append(f"  Sector:      {state.sector}")
    lines.append(f"  Cohort:      {state.cohort}")
    lines.append(f"  Occupation:  {state.target_occupation or GENERIC_OCCUPATION}")
    lines.append(f"  Rows:        {view.scoped_rows}")
    lines.append("")

    counters = (
        ("Total workers", format_count(stats.total)),
        ("Low wage", format_count(stats.low_wage)),
        ("Underemployed", format_count(stats.underemployed)),
        ("Stalled", format_count(stats.stalled)),
        ("Stranded rate", format_rate(stats.stranded_rate)),
        ("Workers in pool", format_count(view.target_pool)),
    )
    for label, value in counters:
        lines.append(f"  {label:<16}  {value:>12}")

    if view.scoped_rows == 0:
        lines.append("")
        lines.append("  (no rows match this region and sector; check 'list-sectors')")

    return "\n".join(lines)


# ── Breakdown tables ──────────────────────────────────────────────────────────


def format_breakdown_table(
    title: str,
    entries: tuple[tuple[str, float], ...],
    top_n: int | None = None,
) -> str:
    """Format one ordered breakdown as an ASCII table.

    Args:
        title:   Section heading, e.g. ``"Education"``.
        entries: Ordered ``(label, weight)`` pairs.
        top_n:   Optional row cap (occupation tables are long).

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"  [{title.upper()}]")

    if not entries:
        lines.append("    (no workers in scope)")
        return "\n".join(lines)

    total = sum(weight for _, weight in entries)
    shown = entries[:top_n] if top_n else entries

    header = f"    {'Label':<40}  {'Workers':>12}  {'Share':>6}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for label, weight in shown:
        share = format_rate(safe_rate(weight, total))
        lines.append(f"    {label[:40]:<40}  {format_count(weight):>12}  {share:>6}")

    if top_n and len(entries) > top_n:
        lines.append(f"    ... showing {top_n} of {len(entries)} (use --top N to show more)")

    return "\n".join(lines)


def format_breakdowns(view: DashboardView, top_n: int = 10) -> str:
    """Format all three breakdowns for the selected cohort."""
    bd = view.breakdowns
    return "\n".join(
        [
            "",
            f"=== Breakdowns: {view.state.cohort} ===",
            format_breakdown_table("Age", bd.entries(BreakdownDimension.AGE)),
            format_breakdown_table("Education", bd.entries(BreakdownDimension.EDUCATION)),
            format_breakdown_table(
                "Occupation", bd.entries(BreakdownDimension.OCCUPATION), top_n=top_n
            ),
        ]
    )


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(recs: tuple[Recommendation, ...] | list[Recommendation]) -> str:
    """Format the recommendation list as numbered, wrapped paragraphs."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Policy Roadmap ===")

    if not recs:
        lines.append("  (no recommendations)")
        return "\n".join(lines)

    for i, rec in enumerate(recs, start=1):
        lines.append("")
        lines.append(f"  {i:02d}. {rec.title}")
        lines.extend(f"      {line}" for line in textwrap.wrap(rec.body, width=74))

    return "\n".join(lines)
