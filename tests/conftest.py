"""Pytest configuration and shared fixtures."""
import os

import pytest

# Charts are drawn on plain Figures; never try to open a window.
os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from water_quality.csv_parser import parse  # noqa: E402


SAMPLE_CSV = """Site,Date,pH,Temperature (C),Dissolved Oxygen (mg/L),Turbidity (NTU)
"River, North",2024-01-01,7.2,12.5,9.1,3.4
"River, North",2024-01-02,7.4,13.0,8.8,
Lake,2024-01-01,6.9,10.0,10.2,1.1
Lake,2024-01-02,n/a,11.5,9.9,1.3
"""


@pytest.fixture
def sample_text():
    return SAMPLE_CSV


@pytest.fixture
def sample_table():
    return parse(SAMPLE_CSV)


@pytest.fixture
def csv_file(tmp_path):
    """Write CSV text to a temporary file and return its path."""

    def _write(text, name="data.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return path

    return _write
