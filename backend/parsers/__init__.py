"""Parser utilities for converting raw results files into structured data."""

from .base import BaseParser
from .csv_parser import CSVParser, coerce_value, is_blank_row
from .record_loader import RecordLoader, build_record

__all__ = [
    "BaseParser",
    "CSVParser",
    "RecordLoader",
    "build_record",
    "coerce_value",
    "is_blank_row",
]
