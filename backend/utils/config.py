"""Environment-driven settings for the results service."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_RESULTS_PATH = _REPO_ROOT / "examples" / "datos.csv"
DEFAULT_PRECISION = 3


def _parse_precision(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PRECISION
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid DISPLAY_PRECISION %r, using %d", raw, DEFAULT_PRECISION)
        return DEFAULT_PRECISION
    if value < 0:
        logger.warning("Negative DISPLAY_PRECISION %d, using %d", value, DEFAULT_PRECISION)
        return DEFAULT_PRECISION
    return value


class Settings(BaseModel):
    """Runtime settings for the host service."""

    model_config = ConfigDict(frozen=True)

    results_path: Path = DEFAULT_RESULTS_PATH
    display_precision: int = DEFAULT_PRECISION
    cors_origins: Tuple[str, ...] = ("http://localhost:5173",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")
        return cls(
            results_path=Path(os.getenv("RESULTS_CSV_PATH") or DEFAULT_RESULTS_PATH),
            display_precision=_parse_precision(os.getenv("DISPLAY_PRECISION")),
            cors_origins=tuple(item.strip() for item in origins.split(",") if item.strip()),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
