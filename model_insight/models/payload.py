"""
Fitted-model and dataset payloads consumed by the engine.

Models arrive as loosely-typed JSON objects from the model-fitting backend.
``interpretation.detector.parse_model`` decides which variant a payload is
and builds one of the frozen models below; any extra fields in the payload
are ignored.

``LinearModel`` and ``EnsembleModel`` together form a tagged union on the
``kind`` field, so downstream code can branch on the variant.

Dataset alignment
-----------------
``Dataset.x`` rows are aligned to the coefficient list **by position**, not by
name.  Callers must order each row exactly like ``LinearModel.coefficients``.
Width mismatches are tolerated (short rows are zero-padded, long rows are
truncated) and logged by ``interpretation.linear.predict_linear``.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from model_insight.errors import MalformedInput

LINEAR_MARKER = "$linearRegression"
ENSEMBLE_MARKER = "$randomForest"

EnsembleKind = Literal["random_forest_regression", "random_forest_classification"]


class Coefficient(BaseModel):
    """One regression coefficient.

    Attributes:
        name:    Variable name; ``None`` when the backend did not label it.
        value:   Estimated coefficient.
        p_value: Significance of the estimate, if reported.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    value: float
    p_value: Optional[float] = None


class LinearModel(BaseModel):
    """Linear / GLM regression fit.

    Attributes:
        kind:         Union tag, always ``"linear_regression"``.
        coefficients: Ordered coefficients (order = report order = feature order).
        intercept:    Constant term.
        r2, r2_adj, aic, bic, p_value: Fit statistics, when reported.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["linear_regression"] = "linear_regression"
    coefficients: list[Coefficient] = []
    intercept: float = 0.0
    r2: Optional[float] = None
    r2_adj: Optional[float] = None
    aic: Optional[float] = None
    bic: Optional[float] = None
    p_value: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _null_intercept_is_zero(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("intercept") is None:
            data = {**data, "intercept": 0.0}
        return data


class ImportanceItem(BaseModel):
    """Importance magnitude of one feature in an ensemble model."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    value: float


class EnsembleModel(BaseModel):
    """Feature-importance ensemble fit (random forest and similar).

    Attributes:
        kind:       Union tag, regression or classification.
        importance: Importance items, in the order the backend sent them.
        type:       ``"classification"`` or ``"regression"`` as reported.
        metrics:    Free-form metric name -> value mapping, echoed in reports.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: EnsembleKind = "random_forest_regression"
    importance: list[ImportanceItem] = []
    type: Optional[str] = None
    metrics: Optional[dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _read_importance_alias(cls, data: Any) -> Any:
        """Take ``importance`` when present, else ``variable_importance``."""
        if isinstance(data, dict) and data.get("importance") is None:
            data = {**data, "importance": data.get("variable_importance") or []}
        return data


Model = Union[LinearModel, EnsembleModel]


class Dataset(BaseModel):
    """Labeled validation data.

    Attributes:
        x: Feature rows, positionally aligned to the coefficient order.
        y: Observed target values, one per row.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    x: list[list[Optional[float]]]
    y: list[float]

    @model_validator(mode="after")
    def _same_length(self) -> "Dataset":
        if len(self.x) != len(self.y):
            raise ValueError(_length_mismatch(len(self.x), len(self.y)))
        return self

    @classmethod
    def from_payload(cls, data: Any) -> Optional["Dataset"]:
        """Build a Dataset from a request's ``data`` field.

        Returns ``None`` when there is no usable dataset (missing payload,
        or missing / empty ``x`` or ``y``).

        Raises:
            MalformedInput: If ``x`` and ``y`` differ in length.
        """
        if isinstance(data, Dataset):
            return data
        if not data or not data.get("x") or not data.get("y"):
            return None
        if len(data["x"]) != len(data["y"]):
            raise MalformedInput(_length_mismatch(len(data["x"]), len(data["y"])))
        return cls(x=data["x"], y=data["y"])


def _length_mismatch(n_rows: int, n_targets: int) -> str:
    return f"Dataset x has {n_rows} rows but y has {n_targets} values."
