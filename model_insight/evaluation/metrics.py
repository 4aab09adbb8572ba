"""
Regression quality metrics over parallel actual / predicted sequences.

MSE  = mean((a - p)^2)
RMSE = sqrt(MSE)
MAE  = mean(|a - p|)
R²   = 1 - SS_res / SS_tot,  SS_tot = Σ(a - mean(a))^2,  SS_res = Σ(a - p)^2

Degenerate inputs are not special-cased.  Division by zero follows IEEE 754
instead of raising: empty sequences give ``nan`` for every metric, and a
constant ``actual`` series gives ``nan`` (perfect fit) or ``-inf`` (any
residual) for R².  These values flow into reports unchanged, where the
number formatter renders them as ``"N/A"`` / ``"-Infinity"``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from model_insight.errors import MalformedInput


@dataclass(frozen=True)
class RegressionMetrics:
    """Error metrics for one set of predictions.

    Attributes:
        rmse: Root mean squared error.
        mae:  Mean absolute error.
        mse:  Mean squared error.
        r2:   Coefficient of determination.
        n:    Number of observations.
    """

    rmse: float
    mae: float
    mse: float
    r2: float
    n: int


def mse(actual: Sequence[float], predicted: Sequence[float]) -> float:
    errors = _errors(actual, predicted)
    return ieee_divide(sum(e * e for e in errors), len(errors))


def rmse(actual: Sequence[float], predicted: Sequence[float]) -> float:
    return math.sqrt(mse(actual, predicted))


def mae(actual: Sequence[float], predicted: Sequence[float]) -> float:
    errors = _errors(actual, predicted)
    return ieee_divide(sum(abs(e) for e in errors), len(errors))


def r_squared(actual: Sequence[float], predicted: Sequence[float]) -> float:
    """Coefficient of determination of ``predicted`` against ``actual``."""
    errors = _errors(actual, predicted)
    mean_actual = ieee_divide(sum(actual), len(actual))
    ss_total = sum((a - mean_actual) ** 2 for a in actual)
    ss_residual = sum(e * e for e in errors)
    return 1 - ieee_divide(ss_residual, ss_total)


def compute_regression_metrics(
    actual: Sequence[float],
    predicted: Sequence[float],
) -> RegressionMetrics:
    """Compute RMSE, MAE, MSE and R² in one call."""
    return RegressionMetrics(
        rmse=rmse(actual, predicted),
        mae=mae(actual, predicted),
        mse=mse(actual, predicted),
        r2=r_squared(actual, predicted),
        n=len(actual),
    )


def ieee_divide(numerator: float, denominator: float) -> float:
    """``numerator / denominator`` with IEEE 754 semantics for a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _errors(actual: Sequence[float], predicted: Sequence[float]) -> list[float]:
    if len(actual) != len(predicted):
        raise MalformedInput(
            f"actual has {len(actual)} values but predicted has {len(predicted)}."
        )
    return [a - p for a, p in zip(actual, predicted)]
