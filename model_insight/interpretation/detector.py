"""
Model type detection for loosely-typed model payloads.

Rules, evaluated in order (first match wins):
    1. ``$linearRegression`` marker truthy       -> linear_regression
    2. ``$randomForest`` marker truthy           -> random_forest_classification
                                                    if type == "classification",
                                                    else random_forest_regression
    3. non-empty ``coefficients`` list           -> linear_regression
    4. non-empty ``importance`` list             -> random_forest_regression
    5. nothing matched                           -> UnrecognizedModelType

Marker fields always beat structural sniffing: a payload carrying the
ensemble marker is an ensemble even if it also has coefficients.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Mapping

from model_insight.errors import UnrecognizedModelType
from model_insight.models.payload import (
    ENSEMBLE_MARKER,
    LINEAR_MARKER,
    EnsembleModel,
    LinearModel,
    Model,
)

logger = logging.getLogger(__name__)


class ModelKind(StrEnum):
    """Closed set of model variants the engine can interpret."""

    LINEAR_REGRESSION = "linear_regression"
    RANDOM_FOREST_REGRESSION = "random_forest_regression"
    RANDOM_FOREST_CLASSIFICATION = "random_forest_classification"


def detect_model_type(raw: Any) -> ModelKind:
    """Classify a raw model payload.

    Raises:
        UnrecognizedModelType: If no rule matches, or ``raw`` is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise UnrecognizedModelType()

    if raw.get(LINEAR_MARKER):
        kind = ModelKind.LINEAR_REGRESSION
    elif raw.get(ENSEMBLE_MARKER):
        kind = (
            ModelKind.RANDOM_FOREST_CLASSIFICATION
            if raw.get("type") == "classification"
            else ModelKind.RANDOM_FOREST_REGRESSION
        )
    elif _non_empty_list(raw.get("coefficients")):
        kind = ModelKind.LINEAR_REGRESSION
    elif _non_empty_list(raw.get("importance")):
        kind = ModelKind.RANDOM_FOREST_REGRESSION
    else:
        raise UnrecognizedModelType(sorted(str(k) for k in raw))

    logger.debug("Detected model type %s", kind.value)
    return kind


def parse_model(raw: Any) -> Model:
    """Detect the variant of ``raw`` and build the matching model.

    Raises:
        UnrecognizedModelType:    If detection fails.
        pydantic.ValidationError: If the payload fields are malformed.
    """
    kind = detect_model_type(raw)
    if kind is ModelKind.LINEAR_REGRESSION:
        return LinearModel.model_validate({**raw, "kind": kind.value})
    return EnsembleModel.model_validate({**raw, "kind": kind.value})


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0
