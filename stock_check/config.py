"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``STOCK_CHECK_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine never reads configuration on its own.  Callers build an
``AppConfig`` (or use the model defaults) and pass ``config.engine`` /
``config.decision`` into ``StockCheckEngine`` explicitly, so every run is
reproducible from its inputs alone.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Ranking engine constants.

    ``model_version`` is stamped onto every output document and checked by
    the schema validator.  ``required_ticker`` is always present in results.
    """

    model_config = ConfigDict(frozen=True)

    model_version: str = "Stock Check v1.0"
    min_universe_size: int = 100
    required_ticker: str = "INTC"
    top_n: int = 10

    @field_validator("required_ticker")
    @classmethod
    def validate_required_ticker(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("required_ticker must not be empty.")
        return v

    @field_validator("min_universe_size", "top_n")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"value must be >= 1, got {v}.")
        return v

    @field_validator("model_version")
    @classmethod
    def validate_model_version(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("model_version must not be empty.")
        return v


class DecisionConfig(BaseModel):
    """Trade header and sector warning thresholds (computed on the top-N only)."""

    model_config = ConfigDict(frozen=True)

    min_average_growth_pct: float = 0.50
    min_dispersion_pct: float = 0.60
    sector_concentration_threshold: int = 7

    @field_validator("sector_concentration_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"sector_concentration_threshold must be >= 1, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Where CLI runs write the JSON document and display CSV."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/stock_check.log"
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

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    decision: DecisionConfig = DecisionConfig()
    output: OutputConfig = OutputConfig()
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
        FileNotFoundError: If the config file does not exist.
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

    # 3. Apply STOCK_CHECK_* environment variable overrides
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
    """Apply STOCK_CHECK_* env vars to the raw config dict.

    Supported overrides:
      STOCK_CHECK_REQUIRED_TICKER    → raw["engine"]["required_ticker"]
      STOCK_CHECK_MIN_UNIVERSE_SIZE  → raw["engine"]["min_universe_size"]
      STOCK_CHECK_LOG_LEVEL          → raw["logging"]["level"]
      STOCK_CHECK_DEBUG              → raw["debug"]
    """
    if ticker := os.environ.get("STOCK_CHECK_REQUIRED_TICKER"):
        raw.setdefault("engine", {})["required_ticker"] = ticker

    if min_size := os.environ.get("STOCK_CHECK_MIN_UNIVERSE_SIZE"):
        raw.setdefault("engine", {})["min_universe_size"] = min_size

    if log_level := os.environ.get("STOCK_CHECK_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("STOCK_CHECK_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        decision=DecisionConfig(**raw.get("decision", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
