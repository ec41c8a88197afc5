"""
Price series preparation: normalisation, monthly resampling and
month-over-month returns.

Month keys are the UTC first day of the calendar month. They are synthetic
calendar keys, not trading days, so two feeds with different trading
calendars still land on the same key.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .errors import DateParseError

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%d %H:%M:%S")

MonthlyPriceMap = Dict[pd.Timestamp, float]


@dataclass(frozen=True)
class PricePoint:
    date: pd.Timestamp
    close: float


@dataclass(frozen=True)
class PriceSeries:
    symbol: str
    points: Tuple[PricePoint, ...] = ()
    skipped: int = field(default=0, compare=False)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def empty(self) -> bool:
        return not self.points

    def to_series(self) -> pd.Series:
        idx = pd.DatetimeIndex([p.date for p in self.points], tz="UTC", name="date")
        return pd.Series([p.close for p in self.points], index=idx, dtype=float, name=self.symbol)

    def to_raw(self) -> Dict[str, float]:
        out: Dict[str, float] = {}
        for p in self.points:
            fmt = DATE_FORMATS[0] if p.date == p.date.normalize() else DATE_FORMATS[1]
            out[p.date.strftime(fmt)] = p.close
        return out


def parse_date(value: str, symbol: Optional[str] = None) -> pd.Timestamp:
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        # strptime accepts unpadded fields such as "2024-1-5".
        if parsed.strftime(fmt) != value:
            continue
        return pd.Timestamp(parsed, tz="UTC")
    raise DateParseError(value, symbol)


def _to_instant(key: Any, symbol: Optional[str]) -> pd.Timestamp:
    if isinstance(key, str):
        return parse_date(key, symbol)
    if isinstance(key, (date, np.datetime64)):
        ts = pd.Timestamp(key)
        if ts is pd.NaT:
            raise DateParseError(str(key), symbol)
        ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
        # Whole seconds only, matching the finest string format.
        return ts.floor("s")
    raise DateParseError(str(key), symbol)


def _as_price(value: Any) -> Optional[float]:
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def normalize_prices(
    raw: Union[Mapping[Any, Any], pd.Series],
    symbol: str,
    log: Optional[logging.Logger] = None,
) -> PriceSeries:
    """
    Turn a raw ``date -> close`` mapping into a sorted PriceSeries.

    Non-positive and non-finite closes are dropped and counted. Date strings
    must be ``YYYY-MM-DD`` or ``YYYY-MM-DD HH:MM:SS``; anything else raises
    DateParseError. When two keys resolve to the same instant the later one
    in input order wins.
    """
    log = log or logger

    by_instant: Dict[pd.Timestamp, float] = {}
    skipped = 0
    for key, value in raw.items():
        price = _as_price(value)
        if price is None:
            skipped += 1
            continue
        by_instant[_to_instant(key, symbol)] = price

    if skipped:
        log.warning("Ticker %s: skipped %d invalid close points", symbol, skipped)

    points = tuple(PricePoint(d, by_instant[d]) for d in sorted(by_instant))
    return PriceSeries(symbol=symbol, points=points, skipped=skipped)


def month_key(ts: pd.Timestamp) -> pd.Timestamp:
    return pd.Timestamp(year=ts.year, month=ts.month, day=1, tz="UTC")


def monthly_prices(series: Union[PriceSeries, Iterable[PricePoint]]) -> MonthlyPriceMap:
    # Input is ascending, so the last point of each month overwrites the earlier ones.
    points = series.points if isinstance(series, PriceSeries) else series
    out: MonthlyPriceMap = {}
    for p in points:
        out[month_key(p.date)] = p.close
    return out


def sorted_month_keys(monthly: MonthlyPriceMap) -> List[pd.Timestamp]:
    return sorted(monthly)


def monthly_returns(monthly: MonthlyPriceMap, name: Optional[str] = None) -> pd.Series:
    keys = sorted_month_keys(monthly)

    dates: List[pd.Timestamp] = []
    rets: List[float] = []
    for prev, cur in zip(keys, keys[1:]):
        p0 = monthly[prev]
        if p0 == 0:
            continue
        dates.append(cur)
        rets.append(monthly[cur] / p0 - 1.0)

    idx = pd.DatetimeIndex(dates, tz="UTC", name="month")
    return pd.Series(rets, index=idx, dtype=float, name=name)
