from __future__ import annotations

import io

import streamlit as st

from etfcompare.config import CompareConfig
from etfcompare.pipeline import Comparison
from etfcompare.report import format_rows, render_html, write_csv
from etfcompare.ui import render_table_report, section_header


def render_report_table(comparison: Comparison, config: CompareConfig) -> None:
    section_header("Monthly table", "Cumulative values, alpha and the glide weight used for each month.")

    buf = io.StringIO()
    write_csv(comparison, buf)
    stem = f"{comparison.etf_symbol}_vs_{comparison.index_symbol}".replace("^", "")

    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "Download CSV",
            data=buf.getvalue(),
            file_name=f"{stem}.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with c2:
        st.download_button(
            "Download HTML report",
            data=render_html(comparison, config),
            file_name=f"{stem}.html",
            mime="text/html",
            use_container_width=True,
        )

    render_table_report(format_rows(comparison.report_rows()))
