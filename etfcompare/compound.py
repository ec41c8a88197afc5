from __future__ import annotations

import numpy as np
import pandas as pd


BASE = 100.0


def cumulative(returns, base: float = BASE):
    """
    Compound a return sequence into index values starting from ``base``.

    ``cum[i] = cum[i-1] * (1 + r[i])`` with ``cum[-1] = base``. NaN and inf
    propagate. A Series keeps its index.
    """
    r = np.asarray(returns, dtype=float)
    values = np.cumprod(np.concatenate(([float(base)], 1.0 + r)))[1:]
    if isinstance(returns, pd.Series):
        return pd.Series(values, index=returns.index, name=returns.name)
    return values


def total_return(cum, base: float = BASE) -> float:
    c = np.asarray(cum, dtype=float)
    if c.size == 0:
        return float("nan")
    return float(c[-1] / float(base) - 1.0)
