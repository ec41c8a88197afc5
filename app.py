from __future__ import annotations

import datetime as dt
import traceback

import streamlit as st

from etfcompare.config import CompareConfig
from etfcompare.data import load_series
from etfcompare.errors import ComparisonError, NoOverlapError
from etfcompare.pipeline import compare
from etfcompare.ui import inject_global_css, page_header

from sections.alpha_view import render_alpha_view
from sections.performance_view import render_performance_view
from sections.report_table import render_report_table


st.set_page_config(page_title="ETF vs Index", layout="wide")
inject_global_css()


INTERVALS = ["1d", "5d", "1wk", "1mo"]


def _sidebar_config(defaults: CompareConfig) -> CompareConfig:
    with st.sidebar:
        st.header("Comparison")
        etf = st.text_input("ETF symbol", value=defaults.etf_symbol).strip().upper()
        index = st.text_input("Reference index symbol", value=defaults.index_symbol).strip().upper()
        start = st.date_input(
            "Start date",
            value=dt.date.fromisoformat(defaults.start),
            min_value=dt.date(1970, 1, 1),
            max_value=dt.date.today(),
        )
        interval = st.selectbox(
            "Interval",
            options=INTERVALS,
            index=INTERVALS.index(defaults.interval) if defaults.interval in INTERVALS else 0,
        )

        st.header("Blends")
        life_etf = st.slider("LifeStrategy ETF weight", 0.0, 1.0, float(defaults.life_etf), 0.05)
        glide_start = st.slider("Glide path start ETF weight", 0.0, 1.0, float(defaults.glide_start), 0.05)
        glide_end = st.slider("Glide path end ETF weight", 0.0, 1.0, float(defaults.glide_end), 0.05)

    return CompareConfig(
        etf_symbol=etf,
        index_symbol=index,
        start=start.strftime("%Y-%m-%d"),
        interval=interval,
        life_etf=life_etf,
        glide_start=glide_start,
        glide_end=glide_end,
        base=defaults.base,
    )


@st.cache_data(show_spinner=False)
def _load(symbol: str, start: str, interval: str):
    return load_series(symbol, start, interval)


page_header(
    "ETF vs Index",
    "Monthly returns on common months • cumulative base 100 • LifeStrategy and glide path blends",
)

try:
    config = _sidebar_config(CompareConfig.from_env()).validate()

    with st.spinner("Downloading data..."):
        etf_series = _load(config.etf_symbol, config.start, config.interval)
        index_series = _load(config.index_symbol, config.start, config.interval)

    for s in (etf_series, index_series):
        if s.skipped:
            st.caption(f"{s.symbol}: skipped {s.skipped} invalid close points.")

    comparison = compare(etf_series, index_series, config.weights, base=config.base)

    tabs = st.tabs(["Performance", "Alpha", "Table"])
    with tabs[0]:
        render_performance_view(comparison)
    with tabs[1]:
        render_alpha_view(comparison)
    with tabs[2]:
        render_report_table(comparison, config)

except NoOverlapError as e:
    st.warning(str(e))
    st.stop()
except ComparisonError as e:
    st.error(f"{type(e).__name__}: {e}")
    st.stop()
except Exception as e:
    st.error(f"Comparison error: {type(e).__name__}: {e}")
    st.code("".join(traceback.format_exc()))
