"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

import pytest

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

HEADER = "id,fecha,modelo,dataset,accuracy,precision,recall,loss,tiempo_entrenamiento"


@pytest.fixture
def sample_csv_path():
    """Path to the sample datos.csv."""
    return Path(__file__).parent.parent.parent / "examples" / "datos.csv"


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV lines below the standard header and return the file path."""

    def _write(*rows, header=HEADER, name="datos.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path

    return _write
