from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .errors import NoValidPeriodsError


@dataclass(frozen=True)
class SummaryStats:
    total: int
    wins: int
    avg_alpha: float

    @property
    def win_rate(self) -> float:
        return self.wins / self.total if self.total else float("nan")


@dataclass(frozen=True)
class FinalComparison:
    etf_value: float
    index_value: float
    verdict: str


def summary_stats(etf, index) -> SummaryStats:
    """
    Win count and mean tracking difference over the periods with a finite alpha.

    Non-finite alphas count neither as a win nor as a loss. Raises
    NoValidPeriodsError when no period is left.
    """
    e = np.asarray(etf, dtype=float)
    i = np.asarray(index, dtype=float)
    if e.shape != i.shape:
        raise ValueError(f"Length mismatch: {e.shape[0]} vs {i.shape[0]} periods")

    with np.errstate(invalid="ignore"):
        alpha = e - i
    finite = alpha[np.isfinite(alpha)]
    if finite.size == 0:
        raise NoValidPeriodsError()

    return SummaryStats(
        total=int(finite.size),
        wins=int((finite > 0).sum()),
        avg_alpha=float(finite.mean()),
    )


def final_comparison(cum_etf, cum_index) -> FinalComparison:
    e = np.asarray(cum_etf, dtype=float)
    i = np.asarray(cum_index, dtype=float)
    if e.size == 0 or i.size == 0:
        raise NoValidPeriodsError("Final comparison not available: insufficient data.")

    last_e = float(e[-1])
    last_i = float(i[-1])
    if math.isnan(last_e) or math.isnan(last_i):
        raise NoValidPeriodsError("Final comparison not available: insufficient data.")

    if last_e > last_i:
        verdict = "higher than"
    elif last_e < last_i:
        verdict = "lower than"
    else:
        verdict = "equal to"
    return FinalComparison(etf_value=last_e, index_value=last_i, verdict=verdict)
