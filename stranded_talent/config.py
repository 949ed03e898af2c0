"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``STRANDED_TALENT_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI and the Streamlit dashboard both receive an ``AppConfig`` instance —
never raw dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from stranded_talent.models.selection import DEFAULT_SECTOR
from stranded_talent.taxonomy.labor_taxonomy import Cohort, Region

# ── Sub-config models ─────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Filesystem paths for the dataset and map lookup."""

    model_config = ConfigDict(frozen=True)

    dataset_path: str = "data/dashboard_summary_data.json"
    county_mapping_path: str = "config/county_region_mapping.json"


class DashboardConfig(BaseModel):
    """Session defaults and display limits."""

    model_config = ConfigDict(frozen=True)

    default_region: Region = Region.ALL
    default_sector: str = DEFAULT_SECTOR
    default_cohort: Cohort = Cohort.ALL_STRANDED
    landscape_occupations: int = 4     # occupations shown beside the cohort diagnostics
    selectable_occupations: int = 10   # occupation cards in the drill-down

    @field_validator("landscape_occupations", "selectable_occupations")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Occupation display limits must be >= 1, got {v}.")
        return v


class ReportConfig(BaseModel):
    """Executive brief and export settings."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/briefs"
    export_dir: str = "data/outputs/exports"
    auto_print: bool = True
    footer: str = "Tennessee Strategic Workforce Initiative | Executive Confidential"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/stranded_talent.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    It is constructed by ``load_config()`` which merges TOML + .env.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    dashboard: DashboardConfig = DashboardConfig()
    report: ReportConfig = ReportConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply STRANDED_TALENT_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply STRANDED_TALENT_* env vars to the raw config dict.

    Supported overrides:
      STRANDED_TALENT_DATASET_PATH → raw["data"]["dataset_path"]
      STRANDED_TALENT_LOG_LEVEL    → raw["logging"]["level"]
      STRANDED_TALENT_DEBUG        → raw["debug"]
    """
    if dataset_path := os.environ.get("STRANDED_TALENT_DATASET_PATH"):
        raw.setdefault("data", {})["dataset_path"] = dataset_path

    if log_level := os.environ.get("STRANDED_TALENT_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("STRANDED_TALENT_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        dashboard=DashboardConfig(**raw.get("dashboard", {})),
        report=ReportConfig(**raw.get("report", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )


def resolve_path(path: str) -> Path:
    """Resolve a config path relative to the project root unless absolute."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return _find_project_root() / candidate
