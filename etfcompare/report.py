"""
CSV and HTML output for a finished comparison.

Both reports are built from ``Comparison.report_rows()``: months with a
non-finite alpha are not listed.
"""
from __future__ import annotations

import html
import logging
import sys
import webbrowser
from pathlib import Path
from typing import Optional, TextIO, Union

import pandas as pd

from .charts import make_alpha_chart, make_cumulative_chart
from .config import CompareConfig
from .pipeline import Comparison

logger = logging.getLogger(__name__)

ROW_FORMATS = {
    "ETF": "{:.2f}",
    "Index": "{:.2f}",
    "Alpha": "{:.5f}",
    "LifeStrategy": "{:.2f}",
    "GlidePath": "{:.2f}",
    "GlideEtfWeight": "{:.4f}",
}


def format_rows(rows: pd.DataFrame) -> pd.DataFrame:
    out = rows.copy()
    for col, fmt in ROW_FORMATS.items():
        if col in out.columns:
            out[col] = out[col].map(lambda x: fmt.format(x) if pd.notna(x) else "")
    return out


def write_csv(comparison: Comparison, out: Union[str, Path, TextIO, None] = None) -> None:
    formatted = format_rows(comparison.report_rows())
    target = sys.stdout if out is None or out == "" else out
    formatted.to_csv(target, index=False, lineterminator="\n")


_CSS = """
body{font-family:Arial,Helvetica,sans-serif;background:#f6f7fb;color:#1b1b1b;margin:0;padding:24px}
.wrap{max-width:1200px;margin:0 auto}
h1{margin:0 0 8px 0}
.meta{color:#555;margin-bottom:16px}
.cards{display:grid;grid-template-columns:repeat(auto-fit,minmax(220px,1fr));gap:12px;margin:16px 0 24px 0}
.card{background:#fff;border-radius:10px;padding:14px;border:1px solid #e3e5ee}
.card .label{color:#666;font-size:12px;text-transform:uppercase}
.card .value{font-size:20px;font-weight:700;margin-top:6px}
.chart{background:#fff;border-radius:10px;border:1px solid #e3e5ee;padding:12px;margin-bottom:16px}
table{width:100%;border-collapse:collapse;background:#fff;border:1px solid #e3e5ee;margin-top:20px}
th,td{padding:8px 10px;border-bottom:1px solid #eef0f5;text-align:right;font-size:13px}
th:first-child,td:first-child{text-align:left}
thead{background:#f0f3fb}
"""


def _card(label: str, value: str) -> str:
    return (
        f"<div class=\"card\"><div class=\"label\">{html.escape(label)}</div>"
        f"<div class=\"value\">{html.escape(value)}</div></div>"
    )


def render_html(comparison: Comparison, config: CompareConfig) -> str:
    rows = comparison.report_rows()
    stats = comparison.stats
    w = comparison.weights

    cum = comparison.cumulative
    labels = {"etf": comparison.etf_symbol, "index": comparison.index_symbol}
    fig_cum = make_cumulative_chart(cum, labels=labels, base=comparison.base)
    fig_alpha = make_alpha_chart(comparison.report_alpha())

    cards = "".join(
        [
            _card("Win rate", f"{stats.wins}/{stats.total}"),
            _card("Avg alpha", f"{stats.avg_alpha:.5f}"),
            _card("Life ETF weight", f"{w.fixed:.2f}"),
            _card("Glide start/end", f"{w.glide_start:.2f} → {w.glide_end:.2f}"),
        ]
    )
    meta = (
        f"ETF: {comparison.etf_symbol} | Index: {comparison.index_symbol} | "
        f"Start: {config.start} | Interval: {config.interval}"
    )
    table = format_rows(rows).to_html(index=False, border=0, escape=True)

    return "\n".join(
        [
            "<!doctype html>",
            "<html lang=\"en\">",
            "<head>",
            "<meta charset=\"utf-8\">",
            "<meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">",
            "<title>ETF vs Index Report</title>",
            f"<style>{_CSS}</style>",
            "</head>",
            "<body>",
            "<div class=\"wrap\">",
            "<h1>ETF vs Index</h1>",
            f"<div class=\"meta\">{html.escape(meta)}</div>",
            f"<div class=\"cards\">{cards}</div>",
            "<div class=\"chart\">" + fig_cum.to_html(full_html=False, include_plotlyjs="cdn") + "</div>",
            "<div class=\"chart\">" + fig_alpha.to_html(full_html=False, include_plotlyjs=False) + "</div>",
            table,
            "</div>",
            "</body>",
            "</html>",
            "",
        ]
    )


def write_html_report(path: Union[str, Path], comparison: Comparison, config: CompareConfig) -> Path:
    out = Path(path).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_html(comparison, config), encoding="utf-8")
    logger.info("HTML report written to %s", out)
    return out


def open_report(path: Union[str, Path], log: Optional[logging.Logger] = None) -> bool:
    log = log or logger
    try:
        opened = webbrowser.open(Path(path).resolve().as_uri())
    except webbrowser.Error as e:
        log.warning("Failed to open report: %s", e)
        return False
    if not opened:
        log.warning("Failed to open report: no viewer available for %s", path)
    return bool(opened)
