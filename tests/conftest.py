"""Shared fixtures: small synthetic price feeds, no network."""
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from etfcompare.series import normalize_prices  # noqa: E402


@pytest.fixture
def etf_raw():
    # Several trading days per month; the last one of each month carries the monthly close.
    return {
        "2024-01-02": 95.0,
        "2024-01-31": 100.0,
        "2024-02-15": 104.0,
        "2024-02-29": 110.0,
        "2024-03-01": 108.0,
        "2024-03-28": 99.0,
    }


@pytest.fixture
def index_raw():
    return {
        "2024-01-31": 50.0,
        "2024-02-28": 51.0,
        "2024-02-29 16:00:00": 52.0,
        "2024-03-28": 54.0,
    }


@pytest.fixture
def etf_series(etf_raw):
    return normalize_prices(etf_raw, "ETF")


@pytest.fixture
def index_series(index_raw):
    return normalize_prices(index_raw, "IDX")
