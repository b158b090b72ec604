"""CSV parser implementation for experiment results."""

from __future__ import annotations

import csv
import logging
import re
from io import StringIO
from typing import Any, Dict, List, Optional, Union

from .base import BaseParser

LOGGER = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")

CellValue = Union[int, float, str, None]

# Numbers outside this range stay text, like spreadsheet dynamic typing does.
MAX_NUMBER = 2**53
MIN_NUMBER = -(2**53)


def coerce_value(raw: Optional[str]) -> CellValue:
    """Turn a raw CSV cell into a number when it looks like one.

    ``None`` (cell absent from a short row) is preserved as the null sentinel;
    an empty cell stays ``""`` and any other text is returned verbatim.
    """
    if raw is None:
        return None
    match = _NUMBER_PATTERN.match(raw)
    if match is None:
        return raw
    text = raw.strip()
    number: Union[int, float] = float(text) if match.group(2) or "." in text else int(text)
    if not MIN_NUMBER < number < MAX_NUMBER:
        return raw
    return number


def is_blank_row(row: Dict[str, Any]) -> bool:
    """Return ``True`` when every value of ``row`` is ``None`` or ``""``."""
    return all(value is None or value == "" for value in row.values())


class CSVParser(BaseParser):
    """Parse CSV formatted experiment outputs with dynamic typing."""

    def __init__(self, delimiter: str = ",") -> None:
        self.delimiter = delimiter

    def parse_table(self, source: str) -> tuple[list[str], list[dict[str, Any]]]:
        reader = csv.reader(StringIO(source), delimiter=self.delimiter)
        header = next(reader, None)
        if not header:
            return [], []

        duplicates = sorted({name for name in header if header.count(name) > 1})
        if duplicates:
            LOGGER.warning(
                "Duplicate header names %s; the last column of each wins",
                ", ".join(duplicates),
            )

        rows: List[Dict[str, Any]] = []
        dropped = 0
        for cells in reader:
            if cells and len(cells) != len(header):
                LOGGER.warning(
                    "Line %d has %d fields, header has %d; aligning by position",
                    reader.line_num,
                    len(cells),
                    len(header),
                )

            row: Dict[str, Any] = {}
            for index, name in enumerate(header):
                raw = cells[index] if index < len(cells) else None
                row[name] = coerce_value(raw)

            if is_blank_row(row):
                dropped += 1
                continue
            rows.append(row)

        if dropped:
            LOGGER.debug("Dropped %d blank rows", dropped)
        return list(header), rows
