"""
stranded_talent.reporting — Brief rendering, terminal formatting and export.

Every function here consumes an already-derived ``DashboardView``; nothing
in this package filters or aggregates rows.

Modules:
  brief      — Two-page printable HTML executive brief.
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — CSV/JSON flat-file export helpers.
"""
