"""
Tests for simulation/scenario.py.

What we test
------------
1. Estimate — intercept plus contributions, missing inputs count as 0.
2. Non-negative rule — clipping and warning only for matching targets,
   case-insensitive, configurable target list.
3. Contributions — one per coefficient in model order with direction.
4. Narrative — header, per-variable block, final estimate, warning text.
5. Recommendations — top two levers per sign, empty groups omitted.
6. Malformed models raise instead of returning an envelope.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import ValidationError

from model_insight.models.payload import LinearModel
from model_insight.simulation.scenario import (
    build_simulation_recommendations,
    compute_contributions,
    simulate_scenario,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _model(coefs: dict[str, float], intercept: float = 0.0) -> dict[str, Any]:
    return {
        "coefficients": [{"name": n, "value": v} for n, v in coefs.items()],
        "intercept": intercept,
    }


# ── Non-negative rule ─────────────────────────────────────────────────────────

def test_salary_negative_estimate_clipped(salary_model: dict[str, Any]) -> None:
    result = simulate_scenario({"x": 5}, salary_model, "salario")
    assert result.estimate == 0.0
    assert result.has_warning is True
    assert result.original_estimate == -50.0


def test_profit_negative_estimate_kept(salary_model: dict[str, Any]) -> None:
    result = simulate_scenario({"x": 5}, salary_model, "lucro")
    assert result.estimate == -50.0
    assert result.has_warning is False
    assert result.original_estimate == -50.0


def test_rule_matches_substring_case_insensitive(salary_model: dict[str, Any]) -> None:
    result = simulate_scenario({"x": 5}, salary_model, "Salario_Medio_Mensal")
    assert result.has_warning is True
    assert result.estimate == 0.0


def test_positive_estimate_never_warns() -> None:
    result = simulate_scenario({"x": 2}, _model({"x": 10.0}), "salario")
    assert result.estimate == 20.0
    assert result.has_warning is False


def test_custom_target_list(salary_model: dict[str, Any]) -> None:
    result = simulate_scenario({"x": 5}, salary_model, "lucro", non_negative_targets=["lucro"])
    assert result.has_warning is True
    not_clipped = simulate_scenario({"x": 5}, salary_model, "salario", non_negative_targets=["lucro"])
    assert not_clipped.has_warning is False


def test_clipping_is_logged(salary_model: dict[str, Any], caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="model_insight.simulation.scenario"):
        simulate_scenario({"x": 5}, salary_model, "salario")
    assert "clipped to 0" in caplog.text


# ── Estimate & contributions ──────────────────────────────────────────────────

def test_estimate_is_intercept_plus_contributions() -> None:
    model = _model({"a": 2.0, "b": -1.0}, intercept=10.0)
    result = simulate_scenario({"a": 3, "b": 4}, model, "nota")
    assert result.original_estimate == pytest.approx(12.0)
    assert result.estimate == pytest.approx(12.0)


def test_missing_inputs_count_as_zero() -> None:
    model = _model({"a": 2.0, "b": -1.0}, intercept=10.0)
    result = simulate_scenario({"a": 3, "unused": 100}, model, "nota")
    assert result.estimate == pytest.approx(16.0)
    assert result.contributions[1].input_value == 0.0
    assert result.contributions[1].contribution == 0.0


def test_none_input_counts_as_zero() -> None:
    result = simulate_scenario({"a": None}, _model({"a": 2.0}, 1.0), "nota")
    assert result.estimate == 1.0


def test_contributions_in_model_order() -> None:
    model = LinearModel.model_validate(_model({"b": -1.0, "a": 2.0}))
    contributions = compute_contributions(model, {"a": 3, "b": 4})
    assert [c.variable for c in contributions] == ["b", "a"]
    assert [c.contribution for c in contributions] == [-4.0, 6.0]
    assert [c.direction for c in contributions] == ["negative", "positive"]
    assert contributions[1].coefficient == 2.0
    assert contributions[1].input_value == 3.0


def test_accepts_parsed_model(salary_model: dict[str, Any]) -> None:
    result = simulate_scenario({"x": 1}, LinearModel.model_validate(salary_model), "lucro")
    assert result.estimate == -10.0


def test_null_intercept_is_zero() -> None:
    model = {"coefficients": [{"name": "a", "value": 1.0}], "intercept": None}
    assert simulate_scenario({"a": 2}, model, "nota").estimate == 2.0


def test_payload_shape(salary_model: dict[str, Any]) -> None:
    payload = simulate_scenario({"x": 5}, salary_model, "salario").to_payload()
    assert payload["success"] is True
    assert set(payload) == {
        "success",
        "interpretation_text",
        "estimate",
        "original_estimate",
        "contributions",
        "has_warning",
        "recommendations",
    }
    assert payload["contributions"][0]["variable"] == "x"


# ── Narrative ─────────────────────────────────────────────────────────────────

def test_narrative_sections(salary_model: dict[str, Any]) -> None:
    text = simulate_scenario({"x": 5}, salary_model, "salario").interpretation_text

    assert text.startswith("📊 **Interpretação da Simulação do Modelo Preditivo**")
    assert "estima a variável dependente **salario**" in text
    assert "🔹 **Intercepto (constante):** 0.00" in text
    assert "🔸 **x**" in text
    assert "- Coeficiente: -10.00" in text
    assert "- Valor informado: 5.00" in text
    assert "- Contribuição: -50.00" in text
    assert "tende a reduzir o valor de **salario** em aproximadamente 10.00" in text
    assert "📌 **Resultado Estimado para salario:** 0.00" in text
    assert "⚠️ O valor estimado original foi negativo" in text
    assert "📍 **Orientações Práticas:**" in text


def test_narrative_without_warning(salary_model: dict[str, Any]) -> None:
    text = simulate_scenario({"x": 5}, salary_model, "lucro").interpretation_text
    assert "📌 **Resultado Estimado para lucro:** -50.00" in text
    assert "⚠️" not in text
    assert "Este valor representa a previsão pontual" in text


def test_narrative_positive_coefficient_verb() -> None:
    text = simulate_scenario({"a": 1}, _model({"a": 1234.5}), "vendas").interpretation_text
    assert "tende a aumentar o valor de **vendas** em aproximadamente 1,234.50" in text


# ── Recommendations ───────────────────────────────────────────────────────────

def test_recommendations_top_two_per_sign() -> None:
    model = _model({"a": 3.0, "b": 1.0, "c": 2.0, "d": -1.0, "e": -4.0})
    result = simulate_scenario({}, model, "y")
    assert result.recommendations == (
        "Para aumentar **y**, foque em aumentar 'a' e 'c'. "
        "Para diminuir **y**, foque em reduzir 'e' e 'd'."
    )


def test_recommendations_omit_empty_group() -> None:
    result = simulate_scenario({}, _model({"a": 3.0}), "y")
    assert result.recommendations == "Para aumentar **y**, foque em aumentar 'a'."


def test_recommendations_ignore_zero_coefficients() -> None:
    result = simulate_scenario({}, _model({"a": 0.0}), "y")
    assert result.recommendations == ""


def test_recommendations_ties_keep_model_order() -> None:
    model = LinearModel.model_validate(_model({"p": 2.0, "q": 2.0, "r": 2.0}))
    contributions = compute_contributions(model, {})
    rec = build_simulation_recommendations(contributions, "y")
    assert rec == "Para aumentar **y**, foque em aumentar 'p' e 'q'."


# ── Errors ────────────────────────────────────────────────────────────────────

def test_malformed_model_raises() -> None:
    with pytest.raises(ValidationError):
        simulate_scenario({}, {"coefficients": [{"name": "a", "value": "abc"}]}, "y")


def test_non_numeric_input_raises() -> None:
    with pytest.raises(ValueError):
        simulate_scenario({"a": "muito"}, _model({"a": 1.0}), "y")
