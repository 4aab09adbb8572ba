"""
Interpretation of feature-importance ensembles (random forest regression and
classification).

Importances are normalized against the strongest feature (max = 100%) and
listed highest first.  Reported metrics are echoed back verbatim.
"""

from __future__ import annotations

from functools import partial

from model_insight.interpretation.importance import normalize_by_max
from model_insight.models.payload import EnsembleModel, ImportanceItem
from model_insight.models.result import Interpretation
from model_insight.reporting.number_format import DEFAULT_LOCALE, format_number

_HEADERS: dict[str, str] = {
    "random_forest_classification": "🌳 **Random Forest - Classificação**",
    "random_forest_regression":     "🌳 **Random Forest - Regressão**",
}


def interpret_random_forest(
    model: EnsembleModel,
    *,
    locale: str = DEFAULT_LOCALE,
) -> Interpretation:
    """Build the ranked-importance narrative and recommendation for an ensemble.

    Args:
        model:  Parsed ensemble model.
        locale: Locale for accounting-formatted metric values.

    Returns:
        ``Interpretation`` whose ``variable_importance`` is the ranked,
        max-normalized list.
    """
    pct = partial(format_number, digits=1, locale=locale)
    ranked = normalize_by_max(model.importance)

    lines: list[str] = [_HEADERS[model.kind]]

    if ranked:
        lines.append("**Importância das Variáveis (por Permutação):**")
        for item in ranked:
            lines.append(f"- **{item.name}:** {pct(item.importance)}%")

        if len(ranked) >= 2:
            first, second = ranked[0], ranked[1]
            lines.append("")
            lines.append(
                f"🔍 **Análise:** A variável '{first.name}' tem a maior importância "
                f"({pct(first.importance)}%). "
                f"Seguida por '{second.name}' ({pct(second.importance)}%)."
            )
    else:
        lines.append("ℹ️ Importância das variáveis não disponível para este modelo.")

    if model.metrics is not None:
        lines.append("")
        lines.append("**Métricas do Modelo:**")
        for key, value in model.metrics.items():
            lines.append(f"- {key}: {format_number(value, type='accounting', locale=locale)}")

    return Interpretation(
        text="\n".join(lines),
        metrics=dict(model.metrics or {}),
        coefficients=[],
        variable_importance=ranked,
        recommendations=build_ensemble_recommendation(model.importance),
    )


def build_ensemble_recommendation(importance: list[ImportanceItem]) -> str:
    """Point data-collection effort at the feature with the largest raw importance."""
    if not importance:
        return (
            "Considere treinar o modelo com mais dados para obter importância das variáveis."
        )

    # max() keeps the first of equal values
    top = max(importance, key=lambda item: item.value)
    return (
        f"Foque na variável '{top.name}' que tem a maior importância. "
        "Considere coletar dados mais detalhados sobre esta variável para melhorar o modelo."
    )
