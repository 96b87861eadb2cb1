"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``     : committed static defaults
  2. ``config/local.toml``       : optional local overrides (gitignored)
  3. ``.env``                    : local secrets and env overrides (gitignored)
  4. Environment variables       : ``INVENTORY_TRACKER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands and the dashboard receive an ``AppConfig`` instance and hand
the relevant sub-config to the engine, never raw dicts or individual env
var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class DatabaseConfig(BaseModel):
    """SQLite database connection settings."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/inventory.db"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000


class DataConfig(BaseModel):
    """Filesystem paths for exported files."""

    model_config = ConfigDict(frozen=True)

    export_dir: str = "data/exports"


class ForecastConfig(BaseModel):
    """Reorder forecast table settings.

    ``lead_time_days`` is the assumed supplier lead time used to back off the
    suggested order date from the projected stockout day.
    """

    model_config = ConfigDict(frozen=True)

    lead_time_days: int = 7
    high_priority_days: int = 7
    medium_priority_days: int = 14

    @model_validator(mode="after")
    def validate_thresholds(self) -> "ForecastConfig":
        if self.lead_time_days < 0:
            raise ValueError(f"lead_time_days must be >= 0, got {self.lead_time_days}.")
        if self.high_priority_days < 0:
            raise ValueError(
                f"high_priority_days must be >= 0, got {self.high_priority_days}."
            )
        if self.medium_priority_days < self.high_priority_days:
            raise ValueError(
                f"medium_priority_days ({self.medium_priority_days}) must be >= "
                f"high_priority_days ({self.high_priority_days})."
            )
        return self


class RecommendationConfig(BaseModel):
    """Thresholds for the dashboard recommendation rules."""

    model_config = ConfigDict(frozen=True)

    max_cards: int = 3
    high_usage_threshold: float = 5.0
    excess_stock_days: int = 90
    excess_stock_multiplier: int = 3
    low_stock_days: int = 7

    @field_validator("max_cards")
    @classmethod
    def validate_max_cards(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_cards must be >= 1, got {v}.")
        return v


class DashboardConfig(BaseModel):
    """Sizes of the dashboard summary lists."""

    model_config = ConfigDict(frozen=True)

    top_used_limit: int = 5
    trend_window_days: int = 7
    attention_limit: int = 5

    @field_validator("trend_window_days")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"trend_window_days must be >= 1, got {v}.")
        return v


class AuditConfig(BaseModel):
    """Audit trail retention settings."""

    model_config = ConfigDict(frozen=True)

    retention: int = 500
    default_user: str = "Admin"

    @field_validator("retention")
    @classmethod
    def validate_retention(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"retention must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/inventory_tracker.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration, the single source of truth.

    It is constructed by ``load_config()`` which merges TOML + .env.
    """

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    data: DataConfig = DataConfig()
    forecast: ForecastConfig = ForecastConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    dashboard: DashboardConfig = DashboardConfig()
    audit: AuditConfig = AuditConfig()
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
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply INVENTORY_TRACKER_* environment variable overrides
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
    """Apply INVENTORY_TRACKER_* env vars to the raw config dict.

    Supported overrides:
      INVENTORY_TRACKER_DB_PATH    → raw["database"]["db_path"]
      INVENTORY_TRACKER_LOG_LEVEL  → raw["logging"]["level"]
      INVENTORY_TRACKER_DEBUG      → raw["debug"]
    """
    if db_path := os.environ.get("INVENTORY_TRACKER_DB_PATH"):
        raw.setdefault("database", {})["db_path"] = db_path

    if log_level := os.environ.get("INVENTORY_TRACKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("INVENTORY_TRACKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        database=DatabaseConfig(**raw.get("database", {})),
        data=DataConfig(**raw.get("data", {})),
        forecast=ForecastConfig(**raw.get("forecast", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        dashboard=DashboardConfig(**raw.get("dashboard", {})),
        audit=AuditConfig(**raw.get("audit", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
