"""
ASCII terminal formatters for CLI commands.

All formatters accept engine results and return plain multi-line strings
suitable for ``typer.echo()``.  The engine's own prose (markdown with emoji)
is embedded unchanged; these functions only add a header, a performance
banner and compact tables around it.

Performance banner
------------------
When a fit score is available (``r2`` for regressions, ``accuracy`` for
classifiers) the report opens with a one-word rating::

  [EXCELENTE]  score >= 0.90
  [BOA]        score >= 0.75
  [MODERADA]   score >= 0.60
  [FRACA]      anything lower
"""

from __future__ import annotations

import math
from functools import partial
from typing import Any

from model_insight.models.result import InterpretationResult, SimulationResult
from model_insight.reporting.number_format import DEFAULT_LOCALE, format_number

_PERFORMANCE_BANDS: list[tuple[float, str]] = [
    (0.90, "EXCELENTE"),
    (0.75, "BOA"),
    (0.60, "MODERADA"),
]
_SCORE_KEYS = ("r2", "R2", "accuracy")


# ── Performance ───────────────────────────────────────────────────────────────


def classify_performance(score: float) -> str:
    """Map a 0–1 fit score to EXCELENTE / BOA / MODERADA / FRACA."""
    for floor, label in _PERFORMANCE_BANDS:
        if score >= floor:
            return label
    return "FRACA"


def _fit_score(metrics: dict[str, Any] | None) -> float | None:
    for key in _SCORE_KEYS:
        value = (metrics or {}).get(key)
        if isinstance(value, (int, float)) and not math.isnan(value):
            return float(value)
    return None


# ── Interpretation ────────────────────────────────────────────────────────────


def format_interpretation_report(
    result: InterpretationResult,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Format an interpretation envelope for the terminal.

    Sections: header with model type and performance banner, the engine's
    narrative, a variable importance table, and recommendations.  A failure
    envelope renders as a single ``[FAILED]`` block.

    Args:
        result: Envelope from ``interpret_model``.
        locale: Locale passed to the number formatter.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Model Interpretation ===")
    lines.append(f"  Model type: {result.model_type}")

    if not result.success:
        lines.append(f"  [FAILED] {result.error}")
        return "\n".join(lines)

    score = _fit_score(result.metrics)
    if score is None:
        lines.append("  [SCORE UNKNOWN] no r2 / accuracy reported")
    else:
        lines.append(
            f"  [{classify_performance(score)}] fit score "
            f"{format_number(score, type='accounting', locale=locale)}"
        )

    lines.append("")
    lines.append(result.interpretation or "")

    importance = result.variable_importance or []
    if importance:
        lines.append("")
        header = f"  {'Variable':<30}  {'Importance':>10}  {'Direction':>9}"
        lines.append(header)
        lines.append("  " + "-" * (len(header) - 2))
        for item in importance:
            name = str(item.name)[:30]
            pct = f"{item.importance:.1f}%" if not math.isnan(item.importance) else "N/A"
            lines.append(f"  {name:<30}  {pct:>10}  {item.direction or '':>9}")

    if result.recommendations:
        lines.append("")
        lines.append("  ---- Recommendations ----")
        lines.append(result.recommendations)

    return "\n".join(lines)


def format_batch_summary(results: list[InterpretationResult]) -> str:
    """One row per batch request: index, status, model type and error if any."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Batch Interpretation ===")
    n_ok = sum(1 for r in results if r.success)
    lines.append(f"  Requests: {len(results)}  OK: {n_ok}  Failed: {len(results) - n_ok}")

    if not results:
        lines.append("")
        lines.append("  (no requests in batch)")
        return "\n".join(lines)

    lines.append("")
    header = f"  {'#':>3}  {'Status':>8}  {'Model type':<30}  Detail"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for i, r in enumerate(results, start=1):
        status = "[OK]" if r.success else "[FAILED]"
        detail = "" if r.success else str(r.error)[:60]
        lines.append(f"  {i:>3}  {status:>8}  {r.model_type:<30}  {detail}")
    return "\n".join(lines)


# ── Simulation ────────────────────────────────────────────────────────────────


def format_simulation_report(
    result: SimulationResult,
    dependent_variable: str,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Format a scenario simulation for the terminal.

    The contributions table lists every variable with its coefficient, the
    scenario input and the resulting contribution, so the estimate can be
    re-added by hand.  A ``[CLIPPED]`` tag marks estimates forced to 0 by the
    non-negative rule.

    Args:
        result:             Output of ``simulate_scenario``.
        dependent_variable: Outcome name (header).
        locale:             Locale passed to the number formatter.

    Returns:
        Multi-line string.
    """
    acc = partial(format_number, type="accounting", locale=locale)

    lines: list[str] = []
    lines.append("")
    lines.append("=== Scenario Simulation ===")
    lines.append(f"  Target:            {dependent_variable}")
    lines.append(f"  Estimate:          {acc(result.estimate)}")
    if result.has_warning:
        lines.append(
            f"  [CLIPPED] original estimate {acc(result.original_estimate)} "
            "is negative for a non-negative target"
        )

    if result.contributions:
        lines.append("")
        header = (
            f"  {'Variable':<24}  {'Coef':>12}  {'Input':>12}  {'Contribution':>14}"
        )
        lines.append(header)
        lines.append("  " + "-" * (len(header) - 2))
        for c in result.contributions:
            lines.append(
                f"  {str(c.variable)[:24]:<24}  {acc(c.coefficient):>12}  "
                f"{acc(c.input_value):>12}  {acc(c.contribution):>14}"
            )

    lines.append("")
    lines.append(result.interpretation_text)

    if result.recommendations:
        lines.append("")
        lines.append("  ---- Recommendations ----")
        lines.append(result.recommendations)

    return "\n".join(lines)
