from __future__ import annotations

import html
from typing import Any

import pandas as pd
import streamlit as st

UI = {
    "primary": "#1F77B4",
    "text": "#1B1B1B",
    "muted": "#666666",
    "bg": "#F6F7FB",
    "panel": "#FFFFFF",
    "border": "#E3E5EE",
    "head": "#F0F3FB",
    "shadow": "rgba(15,23,42,0.06)",
}


def inject_global_css() -> None:
    st.markdown(
        f"""
<style>
.stApp {{ background: {UI["bg"]}; }}
.block-container {{ padding-top: 0.8rem !important; padding-bottom: 2rem !important; }}

.ui-page-title {{
  font-size: 34px;
  font-weight: 800;
  color: {UI["text"]};
  margin: 0 0 4px 0;
}}
.ui-page-subtitle {{ font-size: 15px; color: {UI["muted"]}; margin: 0 0 16px 0; }}

.ui-section-title {{
  font-size: 18px;
  font-weight: 800;
  color: {UI["text"]};
  margin: 18px 0 4px 0;
}}
.ui-section-subtitle {{ font-size: 13px; color: {UI["muted"]}; margin: 0 0 10px 0; }}

.ui-kpi {{
  background: {UI["panel"]};
  border: 1px solid {UI["border"]};
  border-radius: 10px;
  padding: 14px;
  box-shadow: 0 10px 24px {UI["shadow"]};
}}
.ui-kpi-label {{
  font-size: 11px;
  color: {UI["muted"]};
  text-transform: uppercase;
  letter-spacing: 0.06em;
}}
.ui-kpi-value {{ font-size: 22px; font-weight: 800; color: {UI["text"]}; margin-top: 6px; }}
.ui-kpi-comment {{ font-size: 12px; color: {UI["muted"]}; }}

div[data-testid="stPlotlyChart"] {{
  background: {UI["panel"]};
  border: 1px solid {UI["border"]};
  border-radius: 10px;
  padding: 10px 12px;
  margin: 8px 0 16px 0;
}}

table.ui-report {{
  width: 100%;
  border-collapse: collapse;
  background: {UI["panel"]};
  border: 1px solid {UI["border"]};
  font-size: 13px;
}}
table.ui-report thead th {{
  background: {UI["head"]};
  color: {UI["muted"]};
  padding: 8px 10px;
  text-align: right;
}}
table.ui-report tbody td {{
  padding: 8px 10px;
  border-bottom: 1px solid #EEF0F5;
  text-align: right;
  font-variant-numeric: tabular-nums;
}}
table.ui-report th:first-child, table.ui-report td:first-child {{ text-align: left; }}
</style>
        """,
        unsafe_allow_html=True,
    )


def page_header(title: str, subtitle: str | None = None) -> None:
    st.markdown(f"<div class='ui-page-title'>{html.escape(title)}</div>", unsafe_allow_html=True)
    if subtitle:
        st.markdown(f"<div class='ui-page-subtitle'>{html.escape(subtitle)}</div>", unsafe_allow_html=True)


def section_header(title: str, subtitle: str | None = None) -> None:
    st.markdown(f"<div class='ui-section-title'>{html.escape(title)}</div>", unsafe_allow_html=True)
    if subtitle:
        st.markdown(f"<div class='ui-section-subtitle'>{html.escape(subtitle)}</div>", unsafe_allow_html=True)


def kpi_row(items: list[dict[str, str]]) -> None:
    cols = st.columns(len(items))
    for col, it in zip(cols, items):
        with col:
            st.markdown(
                f"""
<div class="ui-kpi">
  <div class="ui-kpi-label">{html.escape(it.get("label", ""))}</div>
  <div class="ui-kpi-value">{html.escape(it.get("value", ""))}</div>
  <div class="ui-kpi-comment">{html.escape(it.get("comment", ""))}</div>
</div>
                """,
                unsafe_allow_html=True,
            )


def render_table_report(df: pd.DataFrame) -> None:
    cols = list(df.columns)
    thead = "<thead><tr>" + "".join(f"<th>{html.escape(str(c))}</th>" for c in cols) + "</tr></thead>"
    body = []
    for row in df.itertuples(index=False):
        tds = "".join(f"<td>{'' if pd.isna(v) else html.escape(str(v))}</td>" for v in row)
        body.append(f"<tr>{tds}</tr>")
    st.markdown(
        f"<table class='ui-report'>{thead}<tbody>{''.join(body)}</tbody></table>",
        unsafe_allow_html=True,
    )


def apply_plotly_style(fig: Any) -> None:
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=50, b=10),
    )
