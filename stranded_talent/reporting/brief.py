"""
Executive brief renderer: a self-contained, printable HTML document.

Layout (two logical pages, split with ``page-break-after``)
------------------------------------------------------------
  Page 1 — Phase I: Diagnostic Inventory
    header (region, industry, briefing date), four stat boxes, stranded rate,
    age and education bars, top-10 occupation bars.

  Page 2 — Phase II: Intervention Roadmap
    header (focus occupation, cohort), intro paragraph, numbered
    recommendation cards, impact note.

Bars are scaled to the largest value in their own breakdown; an empty or
all-zero breakdown renders 0%-wide bars.  Every interpolated value is HTML
escaped.  With ``auto_print=True`` the document calls ``window.print()`` on
load so the browser's print / save-as-PDF dialog opens immediately.
"""

from __future__ import annotations

import html
import logging
import re
from datetime import date
from pathlib import Path

from stranded_talent.aggregation.breakdown import BreakdownDimension
from stranded_talent.recommendations.composer import GENERIC_OCCUPATION
from stranded_talent.session import DashboardView
from stranded_talent.taxonomy.labor_taxonomy import region_display_name
from stranded_talent.utils.numbers import format_count, format_rate

logger = logging.getLogger(__name__)

BRIEF_TITLE = "Executive Brief: Stranded Talent Strategy"
DEFAULT_FOOTER = "Tennessee Strategic Workforce Initiative | Executive Confidential"
TOP_OCCUPATIONS = 10

_NAVY = "#1e3a8a"
_AMBER = "#f59e0b"
_EMERALD = "#10b981"

_STYLE = f"""
body {{ font-family: 'Inter', 'Helvetica Neue', Arial, sans-serif; margin: 0; color: #1e293b; background: #fff; }}
.page {{ padding: 64px; min-height: 100vh; box-sizing: border-box; page-break-after: always; position: relative; }}
.header {{ border-bottom: 4px solid {_NAVY}; padding-bottom: 20px; margin-bottom: 32px; display: flex; justify-content: space-between; align-items: flex-end; }}
.header h1 {{ margin: 0; text-transform: uppercase; font-size: 26px; color: {_NAVY}; font-weight: 800; }}
.phase {{ margin: 0; font-size: 10px; font-weight: 800; color: {_AMBER}; text-transform: uppercase; letter-spacing: 0.1em; }}
.meta {{ text-align: right; font-size: 11px; color: #64748b; font-weight: 800; text-transform: uppercase; line-height: 1.6; }}
h2 {{ color: {_NAVY}; border-left: 6px solid {_AMBER}; padding-left: 15px; text-transform: uppercase; font-size: 16px; font-weight: 800; }}
h3 {{ font-size: 11px; text-transform: uppercase; color: {_NAVY}; font-weight: 800; }}
.stats {{ display: grid; grid-template-columns: repeat(5, 1fr); gap: 15px; margin-bottom: 30px; }}
.stat-box {{ background: #f8fafc; border: 1px solid #e2e8f0; padding: 20px; border-radius: 16px; text-align: center; }}
.stat-val {{ font-size: 28px; font-weight: 800; color: #1e40af; display: block; }}
.stat-label {{ font-size: 10px; font-weight: 800; color: #64748b; text-transform: uppercase; display: block; margin-bottom: 5px; }}
.grid {{ display: grid; grid-template-columns: 1fr 1fr; gap: 40px; }}
.bar {{ margin-bottom: 12px; }}
.bar-label {{ display: flex; justify-content: space-between; font-size: 10px; font-weight: 800; text-transform: uppercase; color: #64748b; margin-bottom: 4px; }}
.bar-track {{ height: 10px; width: 100%; background: #f1f5f9; border-radius: 4px; overflow: hidden; }}
.bar-fill {{ height: 100%; border-radius: 4px; }}
.rec-card {{ background: {_NAVY}; color: #fff; padding: 28px; border-radius: 20px; margin-top: 24px; }}
.rec-card h3 {{ color: {_AMBER}; margin-top: 0; }}
.rec-title {{ font-size: 18px; font-weight: 800; margin: 0; color: #fef3c7; }}
.rec-body {{ font-size: 14px; line-height: 1.7; margin-top: 12px; color: #e2e8f0; }}
.intro {{ font-size: 14px; line-height: 1.7; color: #334155; }}
.empty {{ font-size: 11px; color: #94a3b8; text-transform: uppercase; }}
.footer {{ margin-top: 48px; border-top: 1px solid #e2e8f0; padding-top: 15px; font-size: 9px; color: #94a3b8; text-align: center; font-weight: 800; text-transform: uppercase; letter-spacing: 0.2em; }}
"""


def render_brief_html(
    view: DashboardView,
    generated_on: date | None = None,
    auto_print: bool = True,
    footer: str = DEFAULT_FOOTER,
) -> str:
    """Render the two-page executive brief for ``view``.

    Args:
        view:         Complete dashboard view (from ``derive_view``).
        generated_on: Briefing date shown in the header. Defaults to today.
        auto_print:   Append a ``window.print()`` script.
        footer:       Footer line on both pages.

    Returns:
        A complete HTML document as a string.
    """
    if generated_on is None:
        generated_on = date.today()

    pages = [
        _diagnostic_page(view, generated_on, footer),
        _roadmap_page(view, footer),
    ]
    script = "<script>window.print();</script>" if auto_print else ""

    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{_esc(BRIEF_TITLE)}</title>\n"
        f"<style>{_STYLE}</style>\n"
        "</head>\n<body>\n"
        + "\n".join(pages)
        + f"\n{script}\n</body>\n</html>\n"
    )


def write_brief(
    html_text: str,
    output_dir: Path,
    view: DashboardView,
    run_date: date | None = None,
) -> Path:
    """Write a rendered brief to ``brief_{region}_{sector}_{date}.html``.

    Args:
        html_text:  Output of ``render_brief_html()``.
        output_dir: Target directory (created if missing).
        view:       The view the brief was rendered from (filename parts).
        run_date:   Date label. Defaults to today.

    Returns:
        Path to the written file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    name = f"brief_{file_slug(view.state.region)}_{file_slug(view.state.sector)}_{run_date}.html"
    path = output_dir / name
    path.write_text(html_text, encoding="utf-8")
    logger.info("Executive brief written: %s", path)
    return path


# ── Page builders ─────────────────────────────────────────────────────────────


def _diagnostic_page(view: DashboardView, generated_on: date, footer: str) -> str:
    state = view.state
    stats = view.stats
    bd = view.breakdowns

    stat_boxes = "".join(
        _stat_box(label, value)
        for label, value in (
            ("Total Scope", format_count(stats.total)),
            ("Low Wage", format_count(stats.low_wage)),
            ("Underemployed", format_count(stats.underemployed)),
            ("Stalled", format_count(stats.stalled)),
            ("Stranded Rate", format_rate(stats.stranded_rate)),
        )
    )

    age_bars = _bar_list(bd.age, bd.max_weight(BreakdownDimension.AGE), _NAVY)
    edu_bars = _bar_list(bd.education, bd.max_weight(BreakdownDimension.EDUCATION), _AMBER)
    occ_bars = _bar_list(
        bd.occupation[:TOP_OCCUPATIONS],
        bd.max_weight(BreakdownDimension.OCCUPATION),
        _EMERALD,
    )

    return f"""<div class="page">
  <div class="header">
    <div>
      <p class="phase">Phase I: Diagnostic Inventory</p>
      <h1>Stranded Talent Analysis</h1>
    </div>
    <div class="meta">
      Region: {_esc(region_display_name(state.region))}<br>
      Industry: {_esc(state.sector)}<br>
      Briefing Date: {_esc(generated_on.isoformat())}
    </div>
  </div>
  <div class="stats">{stat_boxes}</div>
  <div class="grid">
    <div>
      <h2>Demographic Profile: {_esc(state.cohort)}</h2>
      <h3>Age Distribution</h3>
      {age_bars}
      <h3>Education Pipeline</h3>
      {edu_bars}
    </div>
    <div>
      <h2>Occupational Distribution</h2>
      <h3>Primary Target Occupations</h3>
      {occ_bars}
    </div>
  </div>
  <div class="footer">{_esc(footer)}</div>
</div>"""


def _roadmap_page(view: DashboardView, footer: str) -> str:
    state = view.state
    occupation = state.target_occupation or GENERIC_OCCUPATION
    region = region_display_name(state.region)

    cards = "".join(
        f"""
  <div class="rec-card">
    <h3>Priority Recommendation {i:02d}</h3>
    <p class="rec-title">{_esc(rec.title)}</p>
    <p class="rec-body">{_esc(rec.body)}</p>
  </div>"""
        for i, rec in enumerate(view.recommendations, start=1)
    )

    return f"""<div class="page">
  <div class="header">
    <div>
      <p class="phase">Phase II: Intervention Roadmap</p>
      <h1>Strategic Recommendations</h1>
    </div>
    <div class="meta">
      Focus Occupation: {_esc(occupation)}<br>
      Target Cohort: {_esc(state.cohort)}<br>
      Workers in Pool: {format_count(view.target_pool)}
    </div>
  </div>
  <p class="intro">The following interventions are optimized for
    <strong>{_esc(occupation)}</strong> populations within
    <strong>{_esc(region)}</strong>. Addressing these barriers for the
    <strong>{_esc(state.cohort)}</strong> cohort offers the most significant
    regional economic lift.</p>
  {cards}
  <h3>Economic Impact Forecast</h3>
  <p class="intro">Moving individuals in this cohort through the recommended
    pathways is projected to reduce regional labor churn and stabilize
    middle-skill supply chains across the Tennessee {_esc(state.sector)} sector.</p>
  <div class="footer">{_esc(footer)}</div>
</div>"""


# ── Fragments ─────────────────────────────────────────────────────────────────


def _stat_box(label: str, value: str) -> str:
    return (
        f'<div class="stat-box"><span class="stat-label">{_esc(label)}</span>'
        f'<span class="stat-val">{_esc(value)}</span></div>'
    )


def _bar_list(entries: tuple[tuple[str, float], ...], max_value: float, color: str) -> str:
    if not entries:
        return '<p class="empty">No workers in scope</p>'
    return "".join(_bar(label, value, max_value, color) for label, value in entries)


def _bar(label: str, value: float, max_value: float, color: str) -> str:
    width = (value / max_value) * 100.0 if max_value > 0 else 0.0
    return (
        '<div class="bar">'
        f'<div class="bar-label"><span>{_esc(label)}</span>'
        f"<span>{format_count(value)}</span></div>"
        f'<div class="bar-track"><div class="bar-fill" '
        f'style="width: {width:.1f}%; background: {color};"></div></div>'
        "</div>"
    )


def _esc(value: object) -> str:
    return html.escape(str(value))


def file_slug(value: str) -> str:
    """Lower-case, hyphen-separated filename part (``"Other MSA"`` -> ``"other-msa"``)."""
    return re.sub(r"[^a-z0-9]+", "-", str(value).lower()).strip("-") or "all"
