from __future__ import annotations

import logging
from typing import Dict, Optional

import pandas as pd
import yfinance as yf

from .errors import DataRetrievalError
from .series import DATE_FORMATS, PriceSeries, normalize_prices

logger = logging.getLogger(__name__)


def _close_series(obj, name: str = "Close") -> pd.Series:
    # yf.download may hand back MultiIndex columns even for a single ticker.
    if isinstance(obj, pd.Series):
        s = obj.copy()
    elif isinstance(obj, pd.DataFrame):
        if "Close" in obj.columns:
            s = obj["Close"]
            if isinstance(s, pd.DataFrame):
                s = s.iloc[:, 0] if s.shape[1] >= 1 else pd.Series(dtype=float)
        else:
            s = obj.squeeze()
            if isinstance(s, pd.DataFrame):
                s = s.iloc[:, 0] if s.shape[1] >= 1 else pd.Series(dtype=float)
    else:
        s = pd.Series(obj)

    if not isinstance(s.index, pd.DatetimeIndex):
        s.index = pd.to_datetime(s.index, errors="coerce")

    s = s.loc[~s.index.isna()].sort_index()
    s = s[~s.index.duplicated(keep="last")]

    # NaN closes are kept on purpose: the normalizer drops and counts them.
    s = pd.to_numeric(s, errors="coerce").astype(float)
    s.name = name
    return s


def _to_raw(s: pd.Series) -> Dict[str, float]:
    idx = s.index
    if idx.tz is not None:
        idx = idx.tz_localize(None)
    daily = bool((idx == idx.normalize()).all())
    fmt = DATE_FORMATS[0] if daily else DATE_FORMATS[1]
    return {d.strftime(fmt): float(v) for d, v in zip(idx, s.to_numpy(dtype=float))}


def fetch_history(symbol: str, start: str, interval: str = "1d") -> Dict[str, float]:
    """
    Download closes for ``symbol`` since ``start`` as a ``date -> close`` mapping.

    Dates are the exchange-local calendar dates reported by Yahoo. Provider
    failures and empty downloads raise DataRetrievalError; nothing is retried.
    """
    try:
        df = yf.download(
            symbol,
            start=start,
            interval=interval,
            auto_adjust=True,
            progress=False,
            actions=False,
            threads=False,
        )
    except Exception as e:
        raise DataRetrievalError(symbol, f"{type(e).__name__}: {e}") from e

    if df is None or len(df) == 0:
        raise DataRetrievalError(symbol, "no price data returned")

    s = _close_series(df, name=symbol)
    if s.empty:
        raise DataRetrievalError(symbol, "no close column in download")

    logger.debug("%s: downloaded %d bars since %s (%s)", symbol, len(s), start, interval)
    return _to_raw(s)


def load_series(
    symbol: str,
    start: str,
    interval: str = "1d",
    log: Optional[logging.Logger] = None,
) -> PriceSeries:
    return normalize_prices(fetch_history(symbol, start, interval), symbol, log=log)
