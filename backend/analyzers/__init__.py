"""Aggregation over loaded experiment records."""

from .formatting import format_average, round_average
from .performance import (
    PerformanceAnalyzer,
    UnknownMetricError,
    compute_grouped_average,
    compute_metric_summary,
)

__all__ = [
    "PerformanceAnalyzer",
    "UnknownMetricError",
    "compute_grouped_average",
    "compute_metric_summary",
    "format_average",
    "round_average",
]
