from __future__ import annotations

import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def _checked(rets: pd.Series, label: str) -> pd.Series:
    if not rets.index.is_unique:
        raise ValueError(f"{label} returns have duplicate month keys")
    if not rets.index.is_monotonic_increasing:
        logger.debug("%s returns were not sorted by month, sorting", label)
        rets = rets.sort_index()
    return rets


def align_returns(etf: pd.Series, index: pd.Series) -> pd.DataFrame:
    """
    Keep the months present in both return series, in ETF order.

    Returns a frame with ``etf`` and ``index`` columns indexed by month key.
    An empty frame means the two series never overlap.
    """
    etf = _checked(etf, "etf")
    index = _checked(index, "index")

    lookup = dict(zip(index.index, index.to_numpy(dtype=float)))

    positions: list[int] = []
    etf_vals: list[float] = []
    index_vals: list[float] = []
    for i, (key, r) in enumerate(zip(etf.index, etf.to_numpy(dtype=float))):
        if key in lookup:
            positions.append(i)
            etf_vals.append(float(r))
            index_vals.append(float(lookup[key]))

    keys = etf.index.take(np.asarray(positions, dtype=np.intp))
    keys = keys.rename("month")
    return pd.DataFrame({"etf": etf_vals, "index": index_vals}, index=keys, dtype=float)
