"""
Importance normalization.

The two model families use different bases, and both are intentional
until their consumers confirm otherwise:

normalize_by_sum (linear models)
  |coef| / Σ|coef| × 100.  Percentages add up to 100 and express each
  variable's share of the total absolute effect.

normalize_by_max (ensemble models)
  value / max(value) × 100, ranked descending.  The top variable is always
  100 and the others are relative to it.

Do not merge these into one function.
"""

from __future__ import annotations

from model_insight.evaluation.metrics import ieee_divide
from model_insight.models.payload import Coefficient, ImportanceItem
from model_insight.models.result import VariableImportance, direction_of


def normalize_by_sum(
    coefficients: list[Coefficient],
    names: list[str] | None = None,
) -> list[VariableImportance]:
    """Share of total absolute effect per coefficient, in model order.

    Args:
        coefficients: Linear model coefficients.
        names:        Display names to use instead of ``Coefficient.name``
                      (same length and order as ``coefficients``).
    """
    total_abs = sum(abs(c.value) for c in coefficients)
    labels = names if names is not None else [c.name for c in coefficients]
    return [
        VariableImportance(
            name=label,
            importance=ieee_divide(abs(c.value), total_abs) * 100,
            direction=direction_of(c.value),
        )
        for c, label in zip(coefficients, labels)
    ]


def normalize_by_max(items: list[ImportanceItem]) -> list[VariableImportance]:
    """Importance relative to the strongest item, ranked highest first.

    The sort is stable: items with equal percentages keep their input order.
    """
    if not items:
        return []
    max_importance = max(i.value for i in items)
    normalized = [
        VariableImportance(
            name=item.name,
            value=item.value,
            importance=ieee_divide(item.value, max_importance) * 100,
        )
        for item in items
    ]
    return sorted(normalized, key=lambda v: v.importance, reverse=True)
