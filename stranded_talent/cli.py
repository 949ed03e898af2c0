"""
Stranded Talent — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate the selection options.
  4. Load the dataset and derive one ``DashboardView``.
  5. Print or write the result.

Install and run::

    pip install -e .
    stranded-talent --help
    stranded-talent validate-config
    stranded-talent list-sectors
    stranded-talent summarize --region Nashville --sector Manufacturing
    stranded-talent export-brief --region Memphis --cohort "Low Wage" --open
    stranded-talent export-breakdowns --format json
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="stranded-talent",
    help="Stranded Talent — Tennessee labor-market diagnostics and policy briefs.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from stranded_talent.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from stranded_talent.utils.logging import configure_logging
    configure_logging(config.logging)


def _selection_or_exit(
    config,
    region: Optional[str],
    sector: Optional[str],
    cohort: Optional[str],
    occupation: Optional[str],
):
    """Build a ``SelectionState`` from CLI options over the configured defaults."""
    from stranded_talent.models.selection import (
        SelectCohort,
        SelectOccupation,
        SelectRegion,
        SelectSector,
        reduce_selection,
    )
    from stranded_talent.session import initial_selection
    from stranded_talent.taxonomy.labor_taxonomy import Cohort, Region

    state = initial_selection(config.dashboard)

    if region is not None:
        try:
            state = reduce_selection(state, SelectRegion(Region(region)))
        except ValueError:
            valid = ", ".join(str(r) for r in Region)
            typer.echo(f"[ERROR] Unknown region '{region}'. Choose one of: {valid}", err=True)
            raise typer.Exit(code=1)

    if cohort is not None:
        try:
            state = reduce_selection(state, SelectCohort(Cohort(cohort)))
        except ValueError:
            valid = ", ".join(str(c) for c in Cohort)
            typer.echo(f"[ERROR] Unknown cohort '{cohort}'. Choose one of: {valid}", err=True)
            raise typer.Exit(code=1)

    if sector is not None:
        state = reduce_selection(state, SelectSector(sector))
    if occupation is not None:
        state = reduce_selection(state, SelectOccupation(occupation))
    return state


def _derive_or_exit(config, state):
    """Load the configured dataset and derive the view for ``state``."""
    from stranded_talent.config import resolve_path
    from stranded_talent.session import derive_view, open_dataset

    dataset_path = resolve_path(config.data.dataset_path)
    handle = open_dataset(dataset_path)
    if not handle.rows:
        typer.echo(f"[WARN] No rows loaded from {dataset_path}; figures will be zero.", err=True)
    return derive_view(handle.rows, state)


_REGION_HELP = "Region: Nashville, Memphis, Knoxville, Chattanooga, 'Other MSA', Rural or All."
_COHORT_HELP = "Cohort: 'Low Wage', Underemployed, Stalled or 'All Stranded'."


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Dataset path:     {config.data.dataset_path}")
    typer.echo(f"  County mapping:   {config.data.county_mapping_path}")
    typer.echo(f"  Default region:   {config.dashboard.default_region}")
    typer.echo(f"  Default sector:   {config.dashboard.default_sector}")
    typer.echo(f"  Default cohort:   {config.dashboard.default_cohort}")
    typer.echo(f"  Brief output dir: {config.report.output_dir}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list-sectors")
def list_sectors_cmd(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List the selectable NAICS-2 sectors present in the dataset."""
    from stranded_talent.aggregation.scope import list_sectors
    from stranded_talent.config import resolve_path
    from stranded_talent.session import open_dataset

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    handle = open_dataset(resolve_path(config.data.dataset_path))
    sectors = list_sectors(handle.rows)
    if not sectors:
        typer.echo("No sectors found. Check data.dataset_path in the config.")
        return

    for sector in sectors:
        typer.echo(f"  {sector}")
    typer.echo("")
    typer.echo(f"[OK] {len(sectors)} sector(s).")


@app.command("summarize")
def summarize(
    region: Optional[str] = typer.Option(None, "--region", help=_REGION_HELP),
    sector: Optional[str] = typer.Option(None, "--sector", help="Exact NAICS-2 sector label."),
    cohort: Optional[str] = typer.Option(None, "--cohort", help=_COHORT_HELP),
    occupation: Optional[str] = typer.Option(
        None,
        "--occupation",
        help="Target occupation. Defaults to the largest occupation in scope.",
    ),
    top_n: int = typer.Option(10, "--top", min=1, help="Occupation rows to show."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print top-line stats, breakdowns and the policy roadmap for a selection."""
    from stranded_talent.reporting.formatters import (
        format_breakdowns,
        format_recommendations,
        format_scope_summary,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    state = _selection_or_exit(config, region, sector, cohort, occupation)
    view = _derive_or_exit(config, state)

    typer.echo(format_scope_summary(view))
    typer.echo(format_breakdowns(view, top_n=top_n))
    typer.echo(format_recommendations(view.recommendations))
    typer.echo("")


@app.command("export-brief")
def export_brief(
    region: Optional[str] = typer.Option(None, "--region", help=_REGION_HELP),
    sector: Optional[str] = typer.Option(None, "--sector", help="Exact NAICS-2 sector label."),
    cohort: Optional[str] = typer.Option(None, "--cohort", help=_COHORT_HELP),
    occupation: Optional[str] = typer.Option(None, "--occupation", help="Target occupation."),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override report.output_dir from config.",
    ),
    open_browser: bool = typer.Option(
        False,
        "--open",
        help="Open the written brief in the system browser (prints automatically).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Write the two-page executive brief as a standalone HTML file."""
    import webbrowser

    from stranded_talent.config import resolve_path
    from stranded_talent.reporting.brief import render_brief_html, write_brief

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    state = _selection_or_exit(config, region, sector, cohort, occupation)
    view = _derive_or_exit(config, state)

    today = date.today()
    html_text = render_brief_html(
        view,
        generated_on=today,
        auto_print=config.report.auto_print,
        footer=config.report.footer,
    )
    target_dir = Path(output_dir) if output_dir else resolve_path(config.report.output_dir)
    path = write_brief(html_text, target_dir, view, run_date=today)

    typer.echo(f"  Brief: {path}")
    if open_browser:
        webbrowser.open(path.resolve().as_uri())
    typer.echo("[OK] Executive brief written.")


@app.command("export-breakdowns")
def export_breakdowns(
    region: Optional[str] = typer.Option(None, "--region", help=_REGION_HELP),
    sector: Optional[str] = typer.Option(None, "--sector", help="Exact NAICS-2 sector label."),
    cohort: Optional[str] = typer.Option(None, "--cohort", help=_COHORT_HELP),
    occupation: Optional[str] = typer.Option(None, "--occupation", help="Target occupation."),
    fmt: str = typer.Option("csv", "--format", help="Output format: csv or json."),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override report.export_dir from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Export the selection's breakdowns (csv) or full view payload (json)."""
    from stranded_talent.config import resolve_path
    from stranded_talent.reporting.brief import file_slug
    from stranded_talent.reporting.export import (
        BREAKDOWN_EXPORT_FIELDS,
        build_view_payload,
        export_to_csv,
        export_to_json,
        flatten_breakdowns_for_export,
    )

    fmt = fmt.lower()
    if fmt not in ("csv", "json"):
        typer.echo(f"[ERROR] Unsupported format '{fmt}'. Use csv or json.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    state = _selection_or_exit(config, region, sector, cohort, occupation)
    view = _derive_or_exit(config, state)

    target_dir = Path(output_dir) if output_dir else resolve_path(config.report.export_dir)
    stem = f"breakdowns_{file_slug(state.region)}_{file_slug(state.sector)}_{date.today()}"

    if fmt == "csv":
        records = flatten_breakdowns_for_export(view)
        path = export_to_csv(records, target_dir / f"{stem}.csv", BREAKDOWN_EXPORT_FIELDS)
        typer.echo(f"  Rows: {len(records)}")
    else:
        path = export_to_json(build_view_payload(view), target_dir / f"{stem}.json")

    typer.echo(f"  Export: {path}")
    typer.echo("[OK] Breakdowns exported.")


if __name__ == "__main__":
    app()
