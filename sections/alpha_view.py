from __future__ import annotations

import streamlit as st

from etfcompare.charts import make_alpha_chart
from etfcompare.pipeline import Comparison
from etfcompare.ui import apply_plotly_style, kpi_row, section_header


def render_alpha_view(comparison: Comparison) -> None:
    stats = comparison.stats
    section_header("Tracking difference", "Monthly ETF return minus index return on the aligned months.")

    kpi_row(
        [
            {"label": "Win rate", "value": f"{stats.wins}/{stats.total}", "comment": f"{stats.win_rate:.1%} of months"},
            {"label": "Avg alpha", "value": f"{stats.avg_alpha:.5f}", "comment": "Mean monthly difference"},
            {"label": "Aligned months", "value": str(len(comparison)), "comment": "Common to both series"},
        ]
    )

    fig = make_alpha_chart(comparison.report_alpha())
    apply_plotly_style(fig)
    st.plotly_chart(fig, use_container_width=True)

    with st.expander("Verification sample (monthly closes and returns)"):
        st.dataframe(comparison.verification_sample(), hide_index=True, use_container_width=True)
