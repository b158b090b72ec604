"""Display helpers for aggregate values."""

from typing import Optional

from models import round_value

DEFAULT_PLACES = 3
UNDEFINED_DISPLAY = "N/A"


def round_average(value: Optional[float], places: int = DEFAULT_PLACES) -> Optional[float]:
    return round_value(value, places)


def format_average(value: Optional[float], places: int = DEFAULT_PLACES) -> str:
    """Render ``value`` with a fixed number of decimals (``0.9`` -> ``"0.900"``)."""
    if value is None:
        return UNDEFINED_DISPLAY
    return f"{value:.{places}f}"
