"""
Interpretation of linear / GLM regression fits.

Produces, for a ``LinearModel`` and an optional validation ``Dataset``:
  - a Portuguese narrative (intercept, one bullet per coefficient with
    direction and significance, quality metrics block),
  - the metrics block (``rmse``/``mae``/``mse`` only when a dataset is given;
    ``r2``, ``r2_adj``, ``aic``, ``bic``, ``p_value`` always, 0 when unknown),
  - sum-normalized variable importance,
  - recommendations.

Recommendation policy
---------------------
By the number of coefficients with ``p_value < significance_level``:
    0   -> collect more data / review the variables
    1   -> that variable is the practical intervention lever
    >=2 -> report the count and the coefficient with the largest |value|
           (first one wins on ties)
Then always one R² remark: ``r2 < r2_threshold`` -> unmodeled factors may
matter; otherwise -> good explanatory power.

R² source
---------
The model's own ``r2`` is used when it is reported and non-zero.  Otherwise,
with a dataset, R² is computed from ``y`` (actual) against the model's
predictions for ``x``, the same predictions that feed RMSE/MAE/MSE.
"""

from __future__ import annotations

import logging
import math
from functools import partial
from typing import Optional, Sequence

from model_insight.evaluation.metrics import compute_regression_metrics
from model_insight.interpretation.importance import normalize_by_sum
from model_insight.models.payload import Coefficient, Dataset, LinearModel
from model_insight.models.result import Interpretation
from model_insight.reporting.number_format import DEFAULT_LOCALE, format_number

logger = logging.getLogger(__name__)

SIGNIFICANCE_LEVEL = 0.05
R2_THRESHOLD = 0.5
DISPLAY_P_VALUE_WHEN_MISSING = 0.05


def display_names(coefficients: Sequence[Coefficient]) -> list[str]:
    """Coefficient names, with ``"Variável N"`` (1-based) for unnamed ones."""
    return [c.name or f"Variável {i + 1}" for i, c in enumerate(coefficients)]


def predict_linear(
    rows: Sequence[Sequence[Optional[float]]],
    coefficients: Sequence[Coefficient],
    intercept: float = 0.0,
) -> list[float]:
    """Predict ``intercept + Σ coef_i * row_i`` for every feature row.

    This is the only place feature rows meet coefficients.  Alignment is
    positional: ``row[i]`` multiplies ``coefficients[i]`` whatever the names.
    Rows shorter than the coefficient list are padded with 0, longer rows are
    truncated, and missing / NaN features count as 0.  Any width mismatch is
    logged as a warning.
    """
    width = len(coefficients)
    mismatched = 0
    predictions: list[float] = []
    for row in rows:
        if len(row) != width:
            mismatched += 1
        aligned = list(row[:width]) + [0.0] * (width - len(row))
        prediction = intercept
        for coef, feature in zip(coefficients, aligned):
            prediction += coef.value * _feature_value(feature)
        predictions.append(prediction)

    if mismatched:
        logger.warning(
            "%d of %d feature rows do not have %d values; "
            "rows are aligned to coefficients by position",
            mismatched, len(rows), width,
        )
    return predictions


def interpret_linear_regression(
    model: LinearModel,
    data: Optional[Dataset] = None,
    *,
    significance_level: float = SIGNIFICANCE_LEVEL,
    r2_threshold: float = R2_THRESHOLD,
    locale: str = DEFAULT_LOCALE,
) -> Interpretation:
    """Build the narrative, metrics, importance and recommendations for a linear fit.

    Args:
        model:              Parsed linear model.
        data:               Optional validation dataset (rows aligned by position).
        significance_level: p-value cut-off for "statistically significant".
        r2_threshold:       R² below this triggers the low-fit remark.
        locale:             Locale for accounting-formatted numbers.

    Returns:
        ``Interpretation`` ready to be wrapped by the façade.
    """
    acc = partial(format_number, type="accounting", locale=locale)
    coefficients = model.coefficients
    names = display_names(coefficients)

    metrics: dict[str, float] = {}
    r2 = model.r2
    if data is not None:
        predictions = predict_linear(data.x, coefficients, model.intercept)
        fit = compute_regression_metrics(data.y, predictions)
        metrics["rmse"] = fit.rmse
        metrics["mae"] = fit.mae
        metrics["mse"] = fit.mse
        if not r2:
            r2 = fit.r2
    metrics["r2"] = r2 or 0.0
    metrics["r2_adj"] = model.r2_adj or 0.0
    metrics["aic"] = model.aic or 0.0
    metrics["bic"] = model.bic or 0.0
    metrics["p_value"] = model.p_value or 0.0

    lines: list[str] = []
    lines.append("📊 **Regressão Linear**")
    lines.append("Analisa o impacto de cada variável independente sobre a variável dependente.")

    if model.intercept != 0:
        lines.append(
            f"- **Intercepto:** {acc(model.intercept)} "
            "representa o valor base quando todas as variáveis independentes são zero."
        )

    for coef, name in zip(coefficients, names):
        p_value = coef.p_value if coef.p_value is not None else DISPLAY_P_VALUE_WHEN_MISSING
        significance = (
            "estatisticamente significativo"
            if p_value < significance_level
            else "não significativo"
        )
        direction = "aumenta" if coef.value > 0 else "diminui"
        lines.append(
            f"- **{name}:** Coeficiente {acc(coef.value)} "
            f"indica que, ao aumentar {name} em 1 unidade, o resultado {direction} em "
            f"{acc(abs(coef.value))} unidades "
            f"({significance}; p‑valor = {format_number(p_value, type='scientific')})."
        )

    lines.append("")
    lines.append("**Métricas de Qualidade do Modelo:**")
    lines.append(f"- **RMSE:** {acc(metrics.get('rmse'))} (Raiz do erro quadrático médio)")
    lines.append(f"- **MAE:** {acc(metrics.get('mae'))} (Erro absoluto médio)")
    lines.append(f"- **MSE:** {acc(metrics.get('mse'))} (Erro quadrático médio)")
    lines.append(
        f"- **R²:** {acc(metrics['r2'])} "
        f"(Explica {format_number(metrics['r2'] * 100, digits=1, locale=locale)}% da variação)"
    )
    lines.append(f"- **R² Ajustado:** {acc(metrics['r2_adj'])}")
    lines.append(f"- **AIC:** {acc(metrics['aic'])} (Quanto menor, melhor)")
    lines.append(f"- **BIC:** {acc(metrics['bic'])}")

    recommendations = build_linear_recommendations(
        coefficients,
        names,
        metrics["r2"],
        significance_level=significance_level,
        r2_threshold=r2_threshold,
    )

    return Interpretation(
        text="\n".join(lines),
        metrics=metrics,
        coefficients=list(coefficients),
        variable_importance=normalize_by_sum(coefficients, names),
        recommendations=recommendations,
    )


def build_linear_recommendations(
    coefficients: Sequence[Coefficient],
    names: Sequence[str],
    r2: float,
    *,
    significance_level: float = SIGNIFICANCE_LEVEL,
    r2_threshold: float = R2_THRESHOLD,
) -> str:
    """Significance-driven recommendation followed by the R² remark, one per line."""
    significant = [
        name
        for coef, name in zip(coefficients, names)
        if coef.p_value is not None and coef.p_value < significance_level
    ]

    recommendations: list[str] = []
    if not significant:
        recommendations.append(
            "⚠️ **Recomendação:** Nenhuma variável é estatisticamente significativa. "
            "Considere coletar mais dados ou revisar as variáveis do modelo."
        )
    elif len(significant) == 1:
        recommendations.append(
            f"🎯 **Recomendação:** Apenas '{significant[0]}' é significativa. "
            "Foque nessa variável para intervenções práticas."
        )
    else:
        # max() keeps the first of equal keys
        top_index = max(range(len(coefficients)), key=lambda i: abs(coefficients[i].value))
        recommendations.append(
            f"📊 **Recomendação:** {len(significant)} variáveis são significativas. "
            f"A variável '{names[top_index]}' tem o maior impacto. "
            "Considere todas para decisões."
        )

    if r2 < r2_threshold:
        recommendations.append(
            "📉 **Observação:** R² baixo sugere que outros fatores não incluídos no modelo "
            "influenciam a variável dependente."
        )
    else:
        recommendations.append(
            "📈 **Observação:** R² adequado indica boa capacidade explicativa do modelo."
        )

    return "\n".join(recommendations)


def _feature_value(value: Optional[float]) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return value
