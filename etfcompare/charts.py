import pandas as pd
import plotly.graph_objects as go

from .plotly_theme import ALPHA_RED, SERIES_COLORS, register_theme

SERIES_LABELS = {
    "etf": "ETF",
    "index": "Index",
    "fixed_blend": "LifeStrategy",
    "glide_blend": "GlidePath",
}


def _month_labels(idx: pd.Index) -> list[str]:
    if isinstance(idx, pd.DatetimeIndex):
        return list(idx.strftime("%Y-%m"))
    return [str(x) for x in idx]


def make_cumulative_chart(
    cum: pd.DataFrame,
    labels: dict[str, str] | None = None,
    base: float = 100.0,
    height: int = 460,
) -> go.Figure:
    names = {**SERIES_LABELS, **(labels or {})}
    x = _month_labels(cum.index)

    fig = go.Figure()
    for col, color in SERIES_COLORS.items():
        if col not in cum.columns:
            continue
        fig.add_trace(
            go.Scatter(
                x=x,
                y=cum[col].values,
                mode="lines",
                name=names[col],
                line=dict(width=2.2, color=color, shape="spline", smoothing=0.4),
                hovertemplate=f"<b>{names[col]}</b>: %{{y:,.2f}}<extra></extra>",
            )
        )

    fig.update_layout(
        template=register_theme(),
        title=f"Cumulative (base {base:g})",
        yaxis_title=f"Cumulative (base {base:g})",
        height=height,
    )
    return fig


def make_alpha_chart(alpha: pd.Series, height: int = 320) -> go.Figure:
    fig = go.Figure()
    fig.add_bar(
        x=_month_labels(alpha.index),
        y=alpha.values,
        name="Alpha",
        marker=dict(color="rgba(220,53,69,0.35)", line=dict(color=ALPHA_RED, width=1)),
        hovertemplate="Alpha: %{y:+.5f}<extra></extra>",
    )
    fig.update_layout(
        template=register_theme(),
        title="Monthly alpha (ETF - index)",
        yaxis_title="Monthly alpha",
        height=height,
        bargap=0.22,
    )
    return fig
