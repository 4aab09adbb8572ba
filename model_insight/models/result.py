"""
Engine output models.

``InterpretationResult`` is the envelope returned by
``interpretation.service.interpret_model``; ``SimulationResult`` is returned by
``simulation.scenario.simulate_scenario``.  Both are frozen and request scoped:
nothing here is persisted by the engine.

Use ``to_payload()`` to obtain the JSON-like dict handed to the presentation
layer.  Prose fields (``interpretation``, ``interpretation_text``,
``recommendations``) are pre-formatted markdown with emoji and must be
rendered as-is.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

from model_insight.models.payload import Coefficient

Direction = Literal["positive", "negative"]

UNKNOWN_MODEL_TYPE = "unknown"


def direction_of(value: float) -> Direction:
    """``"positive"`` for values above zero, ``"negative"`` otherwise (zero included)."""
    return "positive" if value > 0 else "negative"


def finite_or_none(value: Any) -> Any:
    """Replace NaN and infinities with ``None``, recursing into dicts and lists.

    Payloads are serialized to strict JSON, which has no token for them.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: finite_or_none(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [finite_or_none(v) for v in value]
    return value


class VariableImportance(BaseModel):
    """Normalized importance of one variable.

    Attributes:
        name:       Variable name.
        importance: Normalized importance, in percent.
        direction:  Sign of the coefficient (linear models only).
        value:      Raw importance magnitude (ensemble models only).
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    importance: float
    direction: Optional[Direction] = None
    value: Optional[float] = None


class Contribution(BaseModel):
    """Share of a simulated estimate coming from one variable.

    ``contribution == coefficient * input_value``.
    """

    model_config = ConfigDict(frozen=True)

    variable: Optional[str] = None
    coefficient: float
    input_value: float
    contribution: float
    direction: Direction


@dataclass(frozen=True)
class Interpretation:
    """What a single interpreter produces before the façade wraps it."""

    text: str
    metrics: dict[str, Any]
    coefficients: list[Coefficient]
    variable_importance: list[VariableImportance]
    recommendations: str = ""


class InterpretationResult(BaseModel):
    """Envelope returned by ``interpret_model``.

    On success every field except ``error`` is populated.  On failure only
    ``success``, ``error`` and ``model_type`` (always ``"unknown"``) are set.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    model_type: str
    interpretation: Optional[str] = None
    metrics: Optional[dict[str, Any]] = None
    coefficients: Optional[list[Coefficient]] = None
    variable_importance: Optional[list[VariableImportance]] = None
    recommendations: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_interpretation(
        cls, model_type: str, interpretation: Interpretation
    ) -> "InterpretationResult":
        return cls(
            success=True,
            model_type=model_type,
            interpretation=interpretation.text,
            metrics=interpretation.metrics,
            coefficients=interpretation.coefficients,
            variable_importance=interpretation.variable_importance,
            recommendations=interpretation.recommendations,
        )

    @classmethod
    def failure(cls, error: str) -> "InterpretationResult":
        return cls(success=False, error=error, model_type=UNKNOWN_MODEL_TYPE)

    def to_payload(self) -> dict[str, Any]:
        """JSON-like dict for the presentation layer."""
        if not self.success:
            return {"success": False, "error": self.error, "model_type": self.model_type}
        payload = self.model_dump(exclude={"error"}, exclude_none=True)
        payload["metrics"] = dict(self.metrics or {})
        return finite_or_none(payload)


class SimulationResult(BaseModel):
    """Outcome of a what-if scenario.

    Attributes:
        success:             Always ``True``; failures raise instead.
        interpretation_text: Narrative report.
        estimate:            Final estimate after the non-negative rule.
        original_estimate:   Intercept plus the sum of contributions.
        contributions:       One entry per coefficient, in model order.
        has_warning:         True when the estimate was clipped to zero.
        recommendations:     Levers to raise / lower the outcome.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = True
    interpretation_text: str
    estimate: float
    original_estimate: float
    contributions: list[Contribution]
    has_warning: bool
    recommendations: str

    def to_payload(self) -> dict[str, Any]:
        """JSON-like dict for the presentation layer."""
        return finite_or_none(self.model_dump())
