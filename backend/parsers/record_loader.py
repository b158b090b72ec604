"""Load a results file into typed, immutable experiment records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from models import (
    METRIC_NAMES,
    UNDEFINED_MODEL_LABEL,
    ExperimentRecord,
    Loaded,
    LoadOutcome,
    SourceUnavailable,
)

from .base import BaseParser
from .csv_parser import CSVParser

LOGGER = logging.getLogger(__name__)

RECORD_FIELDS = ("id", "date", "model", "dataset", *METRIC_NAMES)

# Header names (compared stripped and lower-cased) accepted for each field.
COLUMN_ALIASES: Dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "date": ("fecha", "date"),
    "model": ("modelo", "model"),
    "dataset": ("dataset",),
    "accuracy": ("accuracy",),
    "precision": ("precision",),
    "recall": ("recall",),
    "loss": ("loss",),
    "training_time": ("tiempo_entrenamiento", "training_time", "trainingtime"),
}


def resolve_columns(header: List[str]) -> tuple[Dict[str, str], tuple[str, ...], tuple[str, ...]]:
    """Map record fields to header names.

    Returns the mapping, the fields with no matching column and the header
    names that match no field.
    """
    column_map: Dict[str, str] = {}
    for name in header:
        normalized = name.strip().lower()
        for field, aliases in COLUMN_ALIASES.items():
            if normalized in aliases and field not in column_map:
                column_map[field] = name
                break

    missing = tuple(field for field in RECORD_FIELDS if field not in column_map)
    used = set(column_map.values())
    ignored = tuple(name for name in header if name not in used)
    return column_map, missing, ignored


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_metric(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError:
            LOGGER.warning("Metric value exceeds the float range; treating it as absent")
            return None
    return value


def build_record(row: Dict[str, Any], column_map: Dict[str, str]) -> ExperimentRecord:
    """Convert one parsed row into an :class:`ExperimentRecord`."""

    def _cell(field: str) -> Any:
        column = column_map.get(field)
        return row.get(column) if column is not None else None

    model = _as_text(_cell("model"))
    values: Dict[str, Any] = {
        "id": _cell("id"),
        "date": _as_text(_cell("date")),
        "model": model if model else UNDEFINED_MODEL_LABEL,
        "dataset": _as_text(_cell("dataset")),
    }
    for metric in METRIC_NAMES:
        values[metric] = _as_metric(_cell(metric))
    return ExperimentRecord(**values)


class RecordLoader:
    """Read a results file and turn it into a :data:`LoadOutcome`."""

    def __init__(self, parser: Optional[BaseParser] = None, encoding: str = "utf-8-sig") -> None:
        self.parser = parser or CSVParser()
        self.encoding = encoding

    def load(self, path: Path | str) -> LoadOutcome:
        """Load ``path``; read failures become :class:`SourceUnavailable`."""
        source = Path(path)
        try:
            text = source.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Results file unavailable at %s: %s", source, exc)
            return SourceUnavailable(source=str(source), reason=str(exc))
        return self.load_text(text, source=str(source))

    def load_text(self, text: str, source: str = "<memory>") -> Loaded:
        """Parse already-read text. Never raises for malformed content."""
        header, rows = self.parser.parse_table(text)
        column_map, missing, ignored = resolve_columns(header)

        if missing:
            LOGGER.warning("Results file %s lacks columns: %s", source, ", ".join(missing))
        if ignored:
            LOGGER.debug("Ignoring unrecognised columns in %s: %s", source, ", ".join(ignored))

        records = tuple(build_record(row, column_map) for row in rows)
        LOGGER.info("Loaded %d records from %s", len(records), source)
        return Loaded(
            source=source,
            records=records,
            missing_columns=missing,
            ignored_columns=ignored,
        )
