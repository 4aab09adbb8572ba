"""
Shared pytest fixtures for the model_insight test suite.

Provides:
  - Raw model payloads as the fitting backend sends them (plain dicts).
  - ``clean_env``: removes ``MODEL_INSIGHT_*`` variables so config tests see
    only what they set themselves.
"""

from __future__ import annotations

from typing import Any

import pytest


# ── Raw model payloads ────────────────────────────────────────────────────────

@pytest.fixture
def linear_payload() -> dict[str, Any]:
    """Two-variable linear fit: one significant positive, one weak negative."""
    return {
        "$linearRegression": True,
        "coefficients": [
            {"name": "publicidade", "value": 2.0, "p_value": 0.01},
            {"name": "preco", "value": -3.0, "p_value": 0.2},
        ],
        "intercept": 1.5,
        "r2": 0.8,
        "r2_adj": 0.75,
        "aic": 120.0,
        "bic": 125.0,
        "p_value": 0.001,
    }


@pytest.fixture
def classification_payload() -> dict[str, Any]:
    """Random forest classifier with two features and an accuracy metric."""
    return {
        "$randomForest": True,
        "type": "classification",
        "importance": [
            {"name": "idade", "value": 0.2},
            {"name": "renda", "value": 0.4},
        ],
        "metrics": {"accuracy": 0.9},
    }


@pytest.fixture
def regression_forest_payload() -> dict[str, Any]:
    """Random forest regression detected structurally (no marker, no metrics)."""
    return {
        "importance": [
            {"name": "area", "value": 3.0},
            {"name": "quartos", "value": 1.0},
        ],
    }


@pytest.fixture
def salary_model() -> dict[str, Any]:
    """Single negative coefficient: any positive input drives the estimate below 0."""
    return {"coefficients": [{"name": "x", "value": -10.0}], "intercept": 0.0}


# ── Environment ───────────────────────────────────────────────────────────────

@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove MODEL_INSIGHT_* overrides inherited from the shell."""
    for var in ("MODEL_INSIGHT_LOG_LEVEL", "MODEL_INSIGHT_LOCALE", "MODEL_INSIGHT_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
