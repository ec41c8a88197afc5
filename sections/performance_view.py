from __future__ import annotations

import numpy as np
import streamlit as st

from etfcompare.charts import make_cumulative_chart
from etfcompare.compound import total_return
from etfcompare.pipeline import Comparison
from etfcompare.ui import apply_plotly_style, kpi_row, section_header


def _fmt_pct(x: float, digits: int = 2) -> str:
    if x is None or not np.isfinite(x):
        return "—"
    return f"{x * 100:+.{digits}f}%"


def _fmt_value(x: float) -> str:
    if x is None or not np.isfinite(x):
        return "—"
    return f"{x:,.2f}"


def render_performance_view(comparison: Comparison) -> None:
    cum = comparison.cumulative
    base = comparison.base
    first = cum.index[0].strftime("%b %Y")
    last = cum.index[-1].strftime("%b %Y")

    section_header("Cumulative performance", f"All four series compounded from {base:g} over {first} → {last}.")
    kpi_row(
        [
            {
                "label": comparison.etf_symbol,
                "value": _fmt_value(comparison.final.etf_value),
                "comment": _fmt_pct(total_return(cum["etf"], base)),
            },
            {
                "label": comparison.index_symbol,
                "value": _fmt_value(comparison.final.index_value),
                "comment": _fmt_pct(total_return(cum["index"], base)),
            },
            {
                "label": "LifeStrategy",
                "value": _fmt_value(float(cum["fixed_blend"].iloc[-1])),
                "comment": f"ETF weight {comparison.weights.fixed:.2f}",
            },
            {
                "label": "GlidePath",
                "value": _fmt_value(float(cum["glide_blend"].iloc[-1])),
                "comment": f"{comparison.weights.glide_start:.2f} → {comparison.weights.glide_end:.2f}",
            },
        ]
    )

    labels = {"etf": comparison.etf_symbol, "index": comparison.index_symbol}
    fig = make_cumulative_chart(cum, labels=labels, base=base)
    apply_plotly_style(fig)
    st.plotly_chart(fig, use_container_width=True)

    st.caption(
        f"Result: {comparison.etf_symbol} is {comparison.final.verdict} index "
        f"({comparison.final.etf_value:.2f} vs {comparison.final.index_value:.2f})."
    )
