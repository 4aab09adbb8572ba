"""
Model interpretation façade.

``interpret_model`` is the single entry point for interpretation requests:

    raw payload -> parse_model (detector) -> linear | ensemble interpreter
                -> InterpretationResult

Any exception raised along the way (unrecognized model, malformed fields,
inconsistent dataset) is caught here, once, logged, and turned into a failure
envelope ``{success: False, error: <message>, model_type: "unknown"}``.
Failures never carry partial interpretation text.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from model_insight.interpretation.detector import parse_model
from model_insight.interpretation.ensemble import interpret_random_forest
from model_insight.interpretation.linear import (
    R2_THRESHOLD,
    SIGNIFICANCE_LEVEL,
    interpret_linear_regression,
)
from model_insight.models.payload import Dataset, EnsembleModel, LinearModel
from model_insight.models.result import InterpretationResult
from model_insight.reporting.number_format import DEFAULT_LOCALE

logger = logging.getLogger(__name__)


def interpret_model(
    model: Any,
    data: Any = None,
    options: Optional[Mapping[str, Any]] = None,
    *,
    significance_level: float = SIGNIFICANCE_LEVEL,
    r2_threshold: float = R2_THRESHOLD,
    locale: str = DEFAULT_LOCALE,
) -> InterpretationResult:
    """Interpret a fitted model payload.

    Args:
        model:   Raw model payload from the fitting backend, or an
                 already validated ``LinearModel`` / ``EnsembleModel``.
        data:    Optional ``{"x": [[...], ...], "y": [...]}`` validation data.
                 Only linear models use it.
        options: Reserved request options; currently unused.
        significance_level, r2_threshold, locale: Wording thresholds and
                 number locale (see ``interpret_linear_regression``).

    Returns:
        Success or failure ``InterpretationResult``.  Never raises for bad
        input.
    """
    try:
        if isinstance(model, (LinearModel, EnsembleModel)):
            parsed = model
        else:
            parsed = parse_model(model)
        if isinstance(parsed, LinearModel):
            interpretation = interpret_linear_regression(
                parsed,
                Dataset.from_payload(data),
                significance_level=significance_level,
                r2_threshold=r2_threshold,
                locale=locale,
            )
        else:
            interpretation = interpret_random_forest(parsed, locale=locale)
        return InterpretationResult.from_interpretation(parsed.kind, interpretation)
    except Exception as exc:
        logger.exception("Model interpretation failed: %s", exc)
        return InterpretationResult.failure(str(exc))


def interpret_batch(
    requests: Iterable[Mapping[str, Any]],
    **kwargs: Any,
) -> list[InterpretationResult]:
    """Interpret several ``{"model", "data"?, "options"?}`` requests.

    Each request gets its own envelope; one failure does not affect the
    others.  Keyword arguments are forwarded to ``interpret_model``.
    """
    results: list[InterpretationResult] = []
    for request in requests:
        if not isinstance(request, Mapping):
            results.append(InterpretationResult.failure("Requisição inválida: esperado um objeto"))
            continue
        results.append(
            interpret_model(
                request.get("model"),
                request.get("data"),
                request.get("options"),
                **kwargs,
            )
        )
    n_failed = sum(1 for r in results if not r.success)
    logger.info("Batch interpretation: %d requests, %d failed", len(results), n_failed)
    return results

