"""Presentation payloads built from pipeline output."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from analyzers import compute_grouped_average, compute_metric_summary, format_average
from models import ExperimentRecord, Loaded, MetricSummary, ModelGroupSummary
from parsers.record_loader import COLUMN_ALIASES, RECORD_FIELDS

# Rows are echoed under the column names of the results file.
RECORD_COLUMNS: Dict[str, str] = {field: COLUMN_ALIASES[field][0] for field in RECORD_FIELDS}


def summary_table(summary: MetricSummary, places: int = 3) -> List[Dict[str, str]]:
    return [
        {"metric": metric, "average": format_average(value, places)}
        for metric, value in summary.averages.items()
    ]


def model_bar_series(groups: ModelGroupSummary, places: int = 3) -> List[Dict[str, Any]]:
    return [
        {"model": group.model, "average": group.average, "count": group.count}
        for group in groups.rounded(places).groups
    ]


def _numeric_or_none(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def loss_series(records: Sequence[ExperimentRecord]) -> List[Dict[str, Any]]:
    """Loss per record in file order; non-numeric losses become gaps."""
    return [{"date": record.date, "loss": _numeric_or_none(record.loss)} for record in records]


def record_rows(records: Sequence[ExperimentRecord]) -> List[Dict[str, Any]]:
    return [
        {column: getattr(record, field) for field, column in RECORD_COLUMNS.items()}
        for record in records
    ]


def dashboard_payload(loaded: Loaded, places: int = 3) -> Dict[str, Any]:
    """Everything the dashboard renders for one load."""
    records = loaded.records
    summary = compute_metric_summary(records)
    accuracy = compute_grouped_average(records, "accuracy")
    return {
        "status": "empty" if loaded.is_empty else "ok",
        "source": loaded.source,
        "record_count": len(records),
        "missing_columns": list(loaded.missing_columns),
        "ignored_columns": list(loaded.ignored_columns),
        "summary": summary_table(summary, places),
        "accuracy_by_model": model_bar_series(accuracy, places),
        "loss_over_time": loss_series(records),
        "records": record_rows(records),
    }
