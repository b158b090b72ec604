"""Aggregate statistics over parsed experiment records."""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from models import (
    METRIC_NAMES,
    ExperimentRecord,
    MetricSummary,
    ModelAverage,
    ModelGroupSummary,
)

LOGGER = logging.getLogger(__name__)


class UnknownMetricError(ValueError):
    """Raised when an aggregate is requested for an untracked metric."""

    def __init__(self, metric: str) -> None:
        super().__init__(
            f"Unknown metric {metric!r}; expected one of: {', '.join(METRIC_NAMES)}"
        )
        self.metric = metric


def _metric_frame(records: Sequence[ExperimentRecord]) -> pd.DataFrame:
    """Build a frame of model labels and zero-coerced metric values."""
    data: Dict[str, list] = {"model": [record.model for record in records]}
    for metric in METRIC_NAMES:
        data[metric] = [record.metric(metric) for record in records]
    return pd.DataFrame(data, columns=["model", *METRIC_NAMES])


def _mean(values: pd.Series) -> float:
    """Arithmetic mean that stays finite when the plain sum overflows."""
    average = float(values.mean())
    if not math.isfinite(average):
        average = float((values / len(values)).sum())
    return average


def compute_metric_summary(records: Iterable[ExperimentRecord]) -> MetricSummary:
    """Average every tracked metric over ``records``.

    With no records every average is ``None``.
    """
    records = tuple(records)
    if not records:
        LOGGER.debug("No records to summarise; all averages undefined")
        return MetricSummary(averages={metric: None for metric in METRIC_NAMES}, record_count=0)

    frame = _metric_frame(records)
    averages: Dict[str, Optional[float]] = {
        metric: _mean(frame[metric]) for metric in METRIC_NAMES
    }
    return MetricSummary(averages=averages, record_count=len(records))


def compute_grouped_average(
    records: Iterable[ExperimentRecord], metric: str
) -> ModelGroupSummary:
    """Average ``metric`` per model label, keeping first-seen label order."""
    if metric not in METRIC_NAMES:
        raise UnknownMetricError(metric)

    records = tuple(records)
    if not records:
        return ModelGroupSummary(metric=metric)

    grouped = _metric_frame(records).groupby("model", sort=False)[metric]
    means = grouped.agg(_mean)
    counts = grouped.size()
    groups = tuple(
        ModelAverage(model=str(model), average=float(average), count=int(counts[model]))
        for model, average in means.items()
    )
    return ModelGroupSummary(metric=metric, groups=groups)


class PerformanceAnalyzer:
    """Compute the summary views consumed by the dashboard."""

    def compute_metric_summary(self, records: Iterable[ExperimentRecord]) -> MetricSummary:
        return compute_metric_summary(records)

    def compute_grouped_average(
        self, records: Iterable[ExperimentRecord], metric: str = "accuracy"
    ) -> ModelGroupSummary:
        return compute_grouped_average(records, metric)

    def summarize_accuracy(self, records: Iterable[ExperimentRecord]) -> Optional[float]:
        """Return the average accuracy, or ``None`` when there are no records."""
        return compute_metric_summary(records).get("accuracy")
