from unittest.mock import patch

import numpy as np
import pandas as pd
import pytest

from etfcompare.data import fetch_history, load_series
from etfcompare.errors import DataRetrievalError


def _download_frame(dates, closes, tz="America/New_York", multi=False):
    idx = pd.DatetimeIndex(dates, tz=tz, name="Date")
    df = pd.DataFrame({"Open": closes, "Close": closes}, index=idx)
    if multi:
        df.columns = pd.MultiIndex.from_product([df.columns, ["SPY"]], names=["Price", "Ticker"])
    return df


class TestFetchHistory:
    @patch("etfcompare.data.yf.download")
    def test_daily_bars_as_date_strings(self, mock_download):
        mock_download.return_value = _download_frame(["2024-01-02", "2024-01-03"], [470.0, 468.5])

        raw = fetch_history("SPY", "2024-01-01")

        assert raw == {"2024-01-02": 470.0, "2024-01-03": 468.5}
        kwargs = mock_download.call_args.kwargs
        assert kwargs["start"] == "2024-01-01"
        assert kwargs["interval"] == "1d"
        assert kwargs["auto_adjust"] is True

    @patch("etfcompare.data.yf.download")
    def test_multiindex_columns(self, mock_download):
        mock_download.return_value = _download_frame(["2024-01-02"], [470.0], multi=True)
        assert fetch_history("SPY", "2024-01-01") == {"2024-01-02": 470.0}

    @patch("etfcompare.data.yf.download")
    def test_intraday_bars_keep_time(self, mock_download):
        mock_download.return_value = _download_frame(["2024-01-02 09:30", "2024-01-02 10:30"], [1.0, 2.0])
        raw = fetch_history("SPY", "2024-01-01", interval="1h")
        assert list(raw) == ["2024-01-02 09:30:00", "2024-01-02 10:30:00"]

    @patch("etfcompare.data.yf.download")
    def test_nan_closes_passed_through(self, mock_download):
        mock_download.return_value = _download_frame(["2024-01-02", "2024-01-03"], [np.nan, 2.0])
        raw = fetch_history("SPY", "2024-01-01")
        assert np.isnan(raw["2024-01-02"])

    @patch("etfcompare.data.yf.download", side_effect=ConnectionError("timed out"))
    def test_provider_failure(self, _mock_download):
        with pytest.raises(DataRetrievalError, match="history error SPY: ConnectionError: timed out") as exc:
            fetch_history("SPY", "2024-01-01")
        assert exc.value.symbol == "SPY"

    @patch("etfcompare.data.yf.download", return_value=pd.DataFrame())
    def test_empty_download(self, _mock_download):
        with pytest.raises(DataRetrievalError, match="no price data"):
            fetch_history("NOPE", "2024-01-01")

    @patch("etfcompare.data.yf.download", return_value=None)
    def test_none_download(self, _mock_download):
        with pytest.raises(DataRetrievalError):
            fetch_history("NOPE", "2024-01-01")


class TestLoadSeries:
    @patch("etfcompare.data.yf.download")
    def test_normalizes(self, mock_download):
        mock_download.return_value = _download_frame(
            ["2024-01-02", "2024-01-03", "2024-01-04"], [np.nan, 2.0, 3.0]
        )
        s = load_series("SPY", "2024-01-01")
        assert s.symbol == "SPY"
        assert [p.close for p in s.points] == [2.0, 3.0]
        assert s.skipped == 1
        assert s.points[0].date == pd.Timestamp("2024-01-03", tz="UTC")
