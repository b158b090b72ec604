"""Base classes and interfaces for parsers."""

from abc import ABC, abstractmethod
from typing import Any


class BaseParser(ABC):
    """Abstract base class for tabular results parsers."""

    @abstractmethod
    def parse_table(self, source: str) -> tuple[list[str], list[dict[str, Any]]]:
        """Return the header and one dict per non-blank data row."""
        raise NotImplementedError

    def parse(self, source: str) -> list[dict[str, Any]]:
        """Parse the provided source and return structured records."""
        _, rows = self.parse_table(source)
        return rows
