from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .align import align_returns
from .blend import blend_returns, glide_blend, glide_weights
from .compound import BASE, cumulative
from .errors import NoOverlapError
from .series import MonthlyPriceMap, PriceSeries, monthly_prices, monthly_returns
from .stats import FinalComparison, SummaryStats, final_comparison, summary_stats

logger = logging.getLogger(__name__)

ALIGNED_COLUMNS = ["etf", "index", "alpha", "fixed_blend", "glide_blend", "glide_weight"]
SERIES_COLUMNS = ["etf", "index", "fixed_blend", "glide_blend"]

REPORT_COLUMNS = ["Date", "ETF", "Index", "Alpha", "LifeStrategy", "GlidePath", "GlideEtfWeight"]
VERIFY_COLUMNS = ["Date", "ETF_Close", "Index_Close", "ETF_Return", "Index_Return", "Alpha"]


@dataclass(frozen=True)
class BlendWeights:
    fixed: float = 0.80
    glide_start: float = 0.90
    glide_end: float = 0.60


@dataclass(frozen=True, eq=False)
class Comparison:
    """
    Everything a report needs from one run.

    ``aligned`` holds the monthly returns per aligned month (ETF, index,
    alpha, both blends and the glide weight used). ``cumulative`` holds the
    four return streams compounded from ``base``.
    """

    etf_symbol: str
    index_symbol: str
    weights: BlendWeights
    base: float
    etf_monthly: MonthlyPriceMap
    index_monthly: MonthlyPriceMap
    aligned: pd.DataFrame
    cumulative: pd.DataFrame
    stats: SummaryStats
    final: FinalComparison

    def __len__(self) -> int:
        return len(self.aligned)

    def _finite(self) -> np.ndarray:
        return np.isfinite(self.aligned["alpha"].to_numpy(dtype=float))

    def report_alpha(self) -> pd.Series:
        """Monthly alpha for the months listed by ``report_rows``."""
        return self.aligned["alpha"].loc[self._finite()]

    def report_rows(self) -> pd.DataFrame:
        finite = self._finite()
        a = self.aligned.loc[finite]
        c = self.cumulative.loc[finite]
        return pd.DataFrame(
            {
                "Date": list(a.index.strftime("%Y-%m")),
                "ETF": c["etf"].to_numpy(),
                "Index": c["index"].to_numpy(),
                "Alpha": a["alpha"].to_numpy(),
                "LifeStrategy": c["fixed_blend"].to_numpy(),
                "GlidePath": c["glide_blend"].to_numpy(),
                "GlideEtfWeight": a["glide_weight"].to_numpy(),
            },
            columns=REPORT_COLUMNS,
        )

    def verification_sample(self, limit: int = 3) -> pd.DataFrame:
        """First and last ``limit`` aligned months with the monthly closes behind them."""
        n = len(self.aligned)
        if n > 2 * limit:
            positions = list(range(limit)) + list(range(n - limit, n))
        else:
            positions = list(range(n))

        rows = []
        for pos in positions:
            key = self.aligned.index[pos]
            row = self.aligned.iloc[pos]
            rows.append(
                {
                    "Date": key.strftime("%Y-%m"),
                    "ETF_Close": self.etf_monthly.get(key, float("nan")),
                    "Index_Close": self.index_monthly.get(key, float("nan")),
                    "ETF_Return": float(row["etf"]),
                    "Index_Return": float(row["index"]),
                    "Alpha": float(row["alpha"]),
                }
            )
        return pd.DataFrame(rows, columns=VERIFY_COLUMNS)


def compare(
    etf: PriceSeries,
    index: PriceSeries,
    weights: Optional[BlendWeights] = None,
    base: float = BASE,
    log: Optional[logging.Logger] = None,
) -> Comparison:
    """
    Run the monthly comparison of ``etf`` against ``index``.

    Raises NoOverlapError when the two series share no month and
    NoValidPeriodsError when no aligned month has a finite alpha.
    """
    log = log or logger
    weights = weights or BlendWeights()

    etf_monthly = monthly_prices(etf)
    index_monthly = monthly_prices(index)

    etf_rets = monthly_returns(etf_monthly, name=etf.symbol)
    index_rets = monthly_returns(index_monthly, name=index.symbol)
    log.debug(
        "%s: %d monthly returns, %s: %d monthly returns",
        etf.symbol, len(etf_rets), index.symbol, len(index_rets),
    )

    aligned = align_returns(etf_rets, index_rets)
    if aligned.empty:
        raise NoOverlapError()

    aligned["alpha"] = aligned["etf"] - aligned["index"]
    aligned["fixed_blend"] = blend_returns(aligned["etf"], aligned["index"], weights.fixed)
    aligned["glide_weight"] = glide_weights(len(aligned), weights.glide_start, weights.glide_end)
    aligned["glide_blend"] = glide_blend(aligned["etf"], aligned["index"], aligned["glide_weight"])
    aligned = aligned.reindex(columns=ALIGNED_COLUMNS)

    cum = pd.DataFrame({col: cumulative(aligned[col], base) for col in SERIES_COLUMNS}, index=aligned.index)

    stats = summary_stats(aligned["etf"], aligned["index"])
    log.info("Tracking difference: ETF>index=%d/%d, avg=%.5f", stats.wins, stats.total, stats.avg_alpha)

    final = final_comparison(cum["etf"], cum["index"])
    log.info(
        "Result: %s is %s index (%.2f vs %.2f)",
        etf.symbol, final.verdict, final.etf_value, final.index_value,
    )

    return Comparison(
        etf_symbol=etf.symbol,
        index_symbol=index.symbol,
        weights=weights,
        base=float(base),
        etf_monthly=etf_monthly,
        index_monthly=index_monthly,
        aligned=aligned,
        cumulative=cum,
        stats=stats,
        final=final,
    )
