"""
Exception hierarchy for model_insight.

Only ``interpretation.service.interpret_model`` turns these into failure
envelopes; everywhere else they propagate to the caller.

Degenerate arithmetic (division by zero in R² or importance normalization)
is deliberately not represented here: it yields ``nan``/``inf`` values in the
result instead of raising.
"""

from __future__ import annotations


class ModelInsightError(Exception):
    """Base class for all engine errors."""


class UnrecognizedModelType(ModelInsightError):
    """Raised when a model payload matches no known model shape.

    Attributes:
        keys: Top-level keys of the rejected payload (empty for non-mappings).
    """

    def __init__(self, keys: list[str] | None = None) -> None:
        self.keys = keys or []
        super().__init__("Não foi possível identificar o tipo de modelo")


class MalformedInput(ModelInsightError, ValueError):
    """Raised when a request is structurally inconsistent.

    Examples: metric sequences of different lengths, or a dataset whose
    ``x`` and ``y`` hold a different number of observations.
    """
