import logging
import math
from unittest.mock import MagicMock

import numpy as np
import pandas as pd
import pytest

from etfcompare.errors import DateParseError
from etfcompare.series import (
    PricePoint,
    PriceSeries,
    month_key,
    monthly_prices,
    monthly_returns,
    normalize_prices,
    parse_date,
    sorted_month_keys,
)


def _ts(s: str) -> pd.Timestamp:
    return pd.Timestamp(s, tz="UTC")


class TestParseDate:
    def test_date_only(self):
        assert parse_date("2024-03-05") == _ts("2024-03-05")

    def test_date_with_time(self):
        assert parse_date("2024-03-05 15:30:00") == _ts("2024-03-05 15:30:00")

    def test_result_is_utc(self):
        assert str(parse_date("2024-03-05").tz) == "UTC"

    @pytest.mark.parametrize(
        "bad",
        ["05/03/2024", "2024-03-05T15:30:00", "", "2024-13-01", "2024-1-5", "2024-01-05 9:30:00"],
    )
    def test_rejects_other_formats(self, bad):
        with pytest.raises(DateParseError):
            parse_date(bad, "SPY")

    def test_error_mentions_symbol(self):
        with pytest.raises(DateParseError, match="SPY"):
            parse_date("garbage", "SPY")


class TestNormalizePrices:
    def test_sorted_ascending(self):
        s = normalize_prices({"2024-03-01": 3.0, "2024-01-01": 1.0, "2024-02-01": 2.0}, "X")
        assert [p.close for p in s.points] == [1.0, 2.0, 3.0]

    def test_instants_strictly_increasing(self, etf_series):
        dates = [p.date for p in etf_series.points]
        assert all(a < b for a, b in zip(dates, dates[1:]))

    def test_drops_invalid_prices_and_counts_them(self):
        raw = {
            "2024-01-01": 1.0,
            "2024-01-02": float("nan"),
            "2024-01-03": 0.0,
            "2024-01-04": -5.0,
            "2024-01-05": float("inf"),
            "2024-01-08": 2.0,
        }
        s = normalize_prices(raw, "X")
        assert len(s) == 2
        assert s.skipped == 4
        assert all(math.isfinite(p.close) and p.close > 0 for p in s.points)

    def test_skipped_points_reported_through_injected_logger(self):
        log = MagicMock(spec=logging.Logger)
        normalize_prices({"2024-01-01": float("nan"), "2024-01-02": 1.0}, "X", log=log)
        log.warning.assert_called_once()
        assert log.warning.call_args.args[1:] == ("X", 1)

    def test_no_warning_when_nothing_skipped(self):
        log = MagicMock(spec=logging.Logger)
        normalize_prices({"2024-01-01": 1.0}, "X", log=log)
        log.warning.assert_not_called()

    def test_invalid_price_skipped_before_date_parse(self):
        s = normalize_prices({"not a date": float("nan"), "2024-01-01": 1.0}, "X")
        assert len(s) == 1

    def test_bad_date_is_fatal(self):
        with pytest.raises(DateParseError):
            normalize_prices({"2024/01/01": 1.0}, "X")

    def test_duplicate_instant_keeps_last(self):
        s = normalize_prices({"2024-01-02": 1.0, "2024-01-02 00:00:00": 2.0}, "X")
        assert len(s) == 1
        assert s.points[0].close == 2.0

    def test_accepts_datetime_indexed_series(self):
        idx = pd.DatetimeIndex(["2024-01-02 09:30", "2024-01-03 09:30"], tz="America/New_York")
        s = normalize_prices(pd.Series([1.0, 2.0], index=idx), "X")
        assert [p.date for p in s.points] == [_ts("2024-01-02 14:30"), _ts("2024-01-03 14:30")]

    def test_idempotent(self, etf_series):
        again = normalize_prices(etf_series.to_raw(), etf_series.symbol)
        assert again == etf_series

    def test_idempotent_with_intraday_timestamps(self, index_series):
        again = normalize_prices(index_series.to_raw(), index_series.symbol)
        assert again == index_series

    def test_idempotent_with_sub_second_timestamps(self):
        raw = pd.Series([1.0], index=pd.DatetimeIndex(["2024-01-02 09:30:00.500"], tz="UTC"))
        first = normalize_prices(raw, "X")
        assert first.points[0].date == _ts("2024-01-02 09:30:00")
        assert normalize_prices(first.to_raw(), "X") == first

    def test_empty_input(self):
        s = normalize_prices({}, "X")
        assert s.empty
        assert s.to_series().empty


class TestPriceSeries:
    def test_to_series(self, etf_series):
        s = etf_series.to_series()
        assert s.name == "ETF"
        assert s.index.is_monotonic_increasing
        assert float(s.iloc[-1]) == 99.0

    def test_is_immutable(self, etf_series):
        with pytest.raises(Exception):
            etf_series.symbol = "Y"


class TestMonthlyPrices:
    def test_last_point_of_month_wins(self, etf_series):
        m = monthly_prices(etf_series)
        assert m == {_ts("2024-01-01"): 100.0, _ts("2024-02-01"): 110.0, _ts("2024-03-01"): 99.0}

    def test_month_key_is_first_of_month_utc(self):
        assert month_key(_ts("2024-02-29 16:00")) == _ts("2024-02-01")

    def test_empty(self):
        assert monthly_prices(PriceSeries("X")) == {}

    def test_accepts_plain_points(self):
        pts = [PricePoint(_ts("2024-05-02"), 1.0), PricePoint(_ts("2024-05-30"), 2.0)]
        assert monthly_prices(pts) == {_ts("2024-05-01"): 2.0}


class TestMonthlyReturns:
    def test_basic_returns(self):
        m = {_ts("2024-01-01"): 100.0, _ts("2024-02-01"): 110.0, _ts("2024-03-01"): 99.0}
        r = monthly_returns(m, name="X")
        assert list(r.index) == [_ts("2024-02-01"), _ts("2024-03-01")]
        assert r.to_list() == pytest.approx([0.10, -0.10])
        assert r.name == "X"

    def test_does_not_rely_on_dict_order(self):
        m = {_ts("2024-03-01"): 99.0, _ts("2024-01-01"): 100.0, _ts("2024-02-01"): 110.0}
        assert sorted_month_keys(m) == [_ts("2024-01-01"), _ts("2024-02-01"), _ts("2024-03-01")]
        assert monthly_returns(m).to_list() == pytest.approx([0.10, -0.10])

    def test_zero_prior_price_skips_period(self):
        m = {_ts("2024-01-01"): 100.0, _ts("2024-02-01"): 0.0, _ts("2024-03-01"): 50.0}
        r = monthly_returns(m)
        assert list(r.index) == [_ts("2024-02-01")]
        assert r.iloc[0] == pytest.approx(-1.0)
        assert np.isfinite(r).all()

    @pytest.mark.parametrize("n", [0, 1])
    def test_fewer_than_two_months_is_empty(self, n):
        m = {_ts("2024-01-01"): 100.0} if n else {}
        r = monthly_returns(m)
        assert r.empty
        assert isinstance(r.index, pd.DatetimeIndex)
