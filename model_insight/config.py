"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local overrides (gitignored)
  4. Environment variables        — ``MODEL_INSIGHT_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine functions themselves are pure and take plain keyword arguments
with module-level defaults; only the CLI reads an ``AppConfig`` and passes
its values down.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from model_insight.reporting.number_format import FORMAT_TYPES
from model_insight.simulation.rules import NON_NEGATIVE_TARGETS

# ── Sub-config models ─────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class FormattingConfig(BaseModel):
    """Number rendering settings used for human-readable output."""

    model_config = ConfigDict(frozen=True)

    locale: str = "pt-BR"
    default_type: str = "auto"

    @field_validator("default_type")
    @classmethod
    def validate_default_type(cls, v: str) -> str:
        if v not in FORMAT_TYPES:
            raise ValueError(f"default_type must be one of {sorted(FORMAT_TYPES)}, got '{v}'.")
        return v


class InterpretationConfig(BaseModel):
    """Thresholds used when wording coefficient significance and model fit."""

    model_config = ConfigDict(frozen=True)

    significance_level: float = 0.05
    r2_threshold: float = 0.5

    @field_validator("significance_level")
    @classmethod
    def validate_significance(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"significance_level must be in (0.0, 1.0), got {v}.")
        return v


class SimulationConfig(BaseModel):
    """Scenario simulation business rules."""

    model_config = ConfigDict(frozen=True)

    non_negative_targets: list[str] = sorted(NON_NEGATIVE_TARGETS)

    @field_validator("non_negative_targets")
    @classmethod
    def normalize_targets(cls, v: list[str]) -> list[str]:
        return [t.strip().lower() for t in v if t and t.strip()]


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    formatting: FormattingConfig = FormattingConfig()
    interpretation: InterpretationConfig = InterpretationConfig()
    simulation: SimulationConfig = SimulationConfig()
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

    # 3. Apply MODEL_INSIGHT_* environment variable overrides
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
    """Apply MODEL_INSIGHT_* env vars to the raw config dict.

    Supported overrides:
      MODEL_INSIGHT_LOG_LEVEL  → raw["logging"]["level"]
      MODEL_INSIGHT_LOCALE     → raw["formatting"]["locale"]
      MODEL_INSIGHT_DEBUG      → raw["debug"]
    """
    if log_level := os.environ.get("MODEL_INSIGHT_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if locale := os.environ.get("MODEL_INSIGHT_LOCALE"):
        raw.setdefault("formatting", {})["locale"] = locale

    if debug := os.environ.get("MODEL_INSIGHT_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        formatting=FormattingConfig(**raw.get("formatting", {})),
        interpretation=InterpretationConfig(**raw.get("interpretation", {})),
        simulation=SimulationConfig(**raw.get("simulation", {})),
        debug=raw.get("debug", False),
    )
