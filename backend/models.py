"""Pydantic models and domain entities for the results pipeline."""

from __future__ import annotations

import math
from typing import Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

METRIC_NAMES: Tuple[str, ...] = ("accuracy", "precision", "recall", "loss", "training_time")
UNDEFINED_MODEL_LABEL = "undefined"

MetricValue = Union[float, str, None]


def metric_value(value: object) -> float:
    """Return the contribution of a metric cell to an average.

    Absent, blank and non-numeric cells count as ``0.0``; they are neither
    skipped nor propagated as NaN.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return float(value)


def round_value(value: Optional[float], places: int) -> Optional[float]:
    """Round ``value`` to ``places`` decimals, passing ``None`` through."""
    if value is None:
        return None
    return round(value, places)


class ExperimentRecord(BaseModel):
    """One training run as read from the results file."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: Union[int, float, str, None] = None
    date: Optional[str] = None
    model: str = UNDEFINED_MODEL_LABEL
    dataset: Optional[str] = None
    accuracy: MetricValue = None
    precision: MetricValue = None
    recall: MetricValue = None
    loss: MetricValue = None
    training_time: MetricValue = None

    def metric(self, name: str) -> float:
        """Return ``name`` under the zero-coercion policy."""
        return metric_value(getattr(self, name))


class MetricSummary(BaseModel):
    """Global average of every tracked metric.

    ``None`` marks an undefined aggregate (no records), which callers must
    not confuse with a genuine ``0.0`` average.
    """

    model_config = ConfigDict(frozen=True)

    averages: Dict[str, Optional[float]]
    record_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when the summary was computed over no records."""
        return self.record_count == 0

    def get(self, metric: str) -> Optional[float]:
        """Return the average of ``metric``; ``None`` when undefined."""
        return self.averages[metric]

    def rounded(self, places: int = 3) -> "MetricSummary":
        return self.model_copy(
            update={
                "averages": {
                    name: round_value(value, places) for name, value in self.averages.items()
                }
            }
        )


class ModelAverage(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str
    average: float
    count: int = Field(ge=1)


class ModelGroupSummary(BaseModel):
    """Per-model averages of one metric, in first-seen order of the labels."""

    model_config = ConfigDict(frozen=True)

    metric: str
    groups: Tuple[ModelAverage, ...] = ()

    @property
    def models(self) -> Tuple[str, ...]:
        """Model labels in first-seen order."""
        return tuple(group.model for group in self.groups)

    def rounded(self, places: int = 3) -> "ModelGroupSummary":
        return self.model_copy(
            update={
                "groups": tuple(
                    group.model_copy(update={"average": round(group.average, places)})
                    for group in self.groups
                )
            }
        )


class Loaded(BaseModel):
    """Successful load. ``records`` may be empty (header-only file)."""

    model_config = ConfigDict(frozen=True)

    status: Literal["loaded"] = "loaded"
    source: str
    records: Tuple[ExperimentRecord, ...] = ()
    missing_columns: Tuple[str, ...] = ()
    ignored_columns: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.records


class SourceUnavailable(BaseModel):
    """The results file could not be read at all."""

    model_config = ConfigDict(frozen=True)

    status: Literal["source_unavailable"] = "source_unavailable"
    source: str
    reason: str


LoadOutcome = Union[Loaded, SourceUnavailable]
