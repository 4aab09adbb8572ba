"""
What-if scenario simulation on a linear model.

For each coefficient::

    contribution = coefficient * input_values.get(name, 0)
    original_estimate = intercept + Σ contribution

If the dependent variable is an inherently non-negative quantity (see
``simulation.rules``) and the estimate is negative, the reported estimate is
clipped to 0 and ``has_warning`` is set.

There is no error envelope here: malformed models or inputs raise to the
caller (``pydantic.ValidationError``, ``TypeError``, ``ValueError``).
"""

from __future__ import annotations

import logging
import math
from functools import partial
from typing import Any, Iterable, Mapping, Optional, Union

from model_insight.models.payload import LinearModel
from model_insight.models.result import Contribution, SimulationResult, direction_of
from model_insight.reporting.number_format import DEFAULT_LOCALE, format_number
from model_insight.simulation.rules import NON_NEGATIVE_TARGETS, is_non_negative_target

logger = logging.getLogger(__name__)

_TOP_LEVERS = 2


def compute_contributions(
    model: LinearModel,
    input_values: Mapping[str, Any],
) -> list[Contribution]:
    """One ``Contribution`` per coefficient, in model order; missing inputs count as 0."""
    contributions: list[Contribution] = []
    for coef in model.coefficients:
        input_value = _input_value(input_values.get(coef.name))
        contributions.append(
            Contribution(
                variable=coef.name,
                coefficient=coef.value,
                input_value=input_value,
                contribution=coef.value * input_value,
                direction=direction_of(coef.value),
            )
        )
    return contributions


def simulate_scenario(
    input_values: Mapping[str, Any],
    model: Union[LinearModel, Mapping[str, Any]],
    dependent_variable: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    non_negative_targets: Iterable[str] = NON_NEGATIVE_TARGETS,
    locale: str = DEFAULT_LOCALE,
) -> SimulationResult:
    """Evaluate a scenario and explain the estimate variable by variable.

    Args:
        input_values:         Variable name -> scenario value.
        model:                Linear model, parsed or as a raw payload.
        dependent_variable:   Name of the predicted outcome (used in the prose
                              and for the non-negative rule).
        options:              Reserved request options; currently unused.
        non_negative_targets: Substrings marking non-negative outcomes.
        locale:               Locale for accounting-formatted numbers.

    Returns:
        ``SimulationResult`` with narrative, estimates and contributions.
    """
    if not isinstance(model, LinearModel):
        model = LinearModel.model_validate(model)

    contributions = compute_contributions(model, input_values)
    total_estimate = model.intercept + sum(c.contribution for c in contributions)

    has_warning = (
        is_non_negative_target(dependent_variable, non_negative_targets)
        and total_estimate < 0
    )
    final_estimate = 0.0 if has_warning else total_estimate
    if has_warning:
        logger.info(
            "Negative estimate %.4f for non-negative target '%s' clipped to 0",
            total_estimate, dependent_variable,
        )

    text = _build_narrative(
        contributions, model.intercept, dependent_variable, final_estimate, has_warning, locale
    )

    return SimulationResult(
        interpretation_text=text,
        estimate=final_estimate,
        original_estimate=total_estimate,
        contributions=contributions,
        has_warning=has_warning,
        recommendations=build_simulation_recommendations(contributions, dependent_variable),
    )


def build_simulation_recommendations(
    contributions: list[Contribution],
    dependent_variable: str,
) -> str:
    """Name the strongest levers to raise and to lower the outcome.

    Positive and negative coefficients are each ranked by |coefficient|
    (stable on ties); the top two of each group are named.  A group with no
    members produces no sentence.
    """
    positive = sorted(
        (c for c in contributions if c.coefficient > 0),
        key=lambda c: abs(c.coefficient),
        reverse=True,
    )
    negative = sorted(
        (c for c in contributions if c.coefficient < 0),
        key=lambda c: abs(c.coefficient),
        reverse=True,
    )

    recommendations: list[str] = []
    if positive:
        recommendations.append(
            f"Para aumentar **{dependent_variable}**, foque em aumentar "
            f"{_quoted_names(positive[:_TOP_LEVERS])}."
        )
    if negative:
        recommendations.append(
            f"Para diminuir **{dependent_variable}**, foque em reduzir "
            f"{_quoted_names(negative[:_TOP_LEVERS])}."
        )
    return " ".join(recommendations)


# ── Helpers ───────────────────────────────────────────────────────────────────


def _build_narrative(
    contributions: list[Contribution],
    intercept: float,
    dependent_variable: str,
    final_estimate: float,
    has_warning: bool,
    locale: str,
) -> str:
    acc = partial(format_number, type="accounting", locale=locale)
    lines: list[str] = []

    lines.append("📊 **Interpretação da Simulação do Modelo Preditivo**")
    lines.append("")
    lines.append(
        "Este resultado foi obtido com base num modelo de regressão linear "
        f"que estima a variável dependente **{dependent_variable}** a partir de "
        "variáveis explicativas selecionadas."
    )
    lines.append("")
    lines.append(
        "A variável dependente representa o fenómeno que se pretende prever ou compreender, "
        "enquanto as variáveis independentes são os fatores que exercem influência direta."
    )
    lines.append("")
    lines.append(f"🔹 **Intercepto (constante):** {acc(intercept)}")
    lines.append(
        "Este é o valor base estimado quando todas as variáveis explicativas assumem valor zero."
    )
    lines.append("")

    for c in contributions:
        verb = "aumentar" if c.direction == "positive" else "reduzir"
        lines.append(f"🔸 **{c.variable}**")
        lines.append(f"- Coeficiente: {acc(c.coefficient)}")
        lines.append(f"- Valor informado: {acc(c.input_value)}")
        lines.append(f"- Contribuição: {acc(c.contribution)}")
        lines.append(
            f"- Interpretação: Um acréscimo unitário em **{c.variable}** tende a "
            f"{verb} o valor de **{dependent_variable}** "
            f"em aproximadamente {acc(abs(c.coefficient))}, "
            "mantendo as demais variáveis constantes."
        )
        lines.append("")

    lines.append(f"📌 **Resultado Estimado para {dependent_variable}:** {acc(final_estimate)}")
    lines.append("")

    if has_warning:
        lines.append(
            "⚠️ O valor estimado original foi negativo, mas foi ajustado para 0 "
            "por não fazer sentido prático (ex: tempo ou população não pode ser negativo)."
        )
    else:
        lines.append(
            "Este valor representa a previsão pontual para o cenário simulado, "
            "podendo embasar decisões, análises de sensibilidade e projeções futuras."
        )
    lines.append("")

    lines.append("📍 **Orientações Práticas:**")
    lines.append(
        "- Para **reduzir** o valor estimado, priorize reduzir variáveis com "
        "coeficientes positivos mais elevados."
    )
    lines.append(
        "- Para **aumentar** o valor estimado, maximize as variáveis com maior peso "
        "positivo no modelo."
    )
    lines.append(
        "- Use esta simulação como base comparativa entre diferentes cenários "
        "e para orientar intervenções estratégicas."
    )
    return "\n".join(lines)


def _quoted_names(contributions: list[Contribution]) -> str:
    return " e ".join(f"'{c.variable}'" for c in contributions)


def _input_value(value: Any) -> float:
    if value is None:
        return 0.0
    number = float(value)
    return 0.0 if math.isnan(number) else number
