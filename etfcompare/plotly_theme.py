import plotly.io as pio

ETF_BLUE = "#1F77B4"
INDEX_ORANGE = "#FF7F0E"
LIFE_GREEN = "#2CA02C"
GLIDE_PURPLE = "#9467BD"
ALPHA_RED = "#DC3545"
BG = "#FFFFFF"
GRID = "#EEF0F5"
TEXT = "#1B1B1B"

TEMPLATE_NAME = "etfcompare"

SERIES_COLORS = {
    "etf": ETF_BLUE,
    "index": INDEX_ORANGE,
    "fixed_blend": LIFE_GREEN,
    "glide_blend": GLIDE_PURPLE,
}


def register_theme(template_name: str = TEMPLATE_NAME) -> str:
    if template_name in pio.templates:
        return template_name

    base_layout = dict(
        font=dict(
            family="Arial, Helvetica, sans-serif",
            size=13,
            color=TEXT,
        ),
        paper_bgcolor=BG,
        plot_bgcolor=BG,
        margin=dict(l=40, r=20, t=50, b=40),
        xaxis=dict(
            showgrid=True,
            gridcolor=GRID,
            zeroline=False,
            ticks="outside",
            tickcolor=GRID,
        ),
        yaxis=dict(
            showgrid=True,
            gridcolor=GRID,
            zeroline=False,
            ticks="outside",
            tickcolor=GRID,
        ),
        legend=dict(
            orientation="h",
            yanchor="top",
            y=-0.15,
            x=0,
        ),
        hovermode="x unified",
        colorway=list(SERIES_COLORS.values()),
    )

    pio.templates[template_name] = dict(layout=base_layout)
    return template_name
