# etfcompare/__init__.py
from .errors import (
    ComparisonError,
    DateParseError,
    DataRetrievalError,
    NoOverlapError,
    NoValidPeriodsError,
    ConfigError,
    InvalidWeightError,
)
from .series import (
    PricePoint,
    PriceSeries,
    normalize_prices,
    monthly_prices,
    monthly_returns,
    sorted_month_keys,
)
from .align import align_returns
from .blend import blend_returns, glide_weights, glide_blend
from .compound import cumulative, BASE
from .stats import SummaryStats, FinalComparison, summary_stats, final_comparison
from .pipeline import BlendWeights, Comparison, compare
from .config import CompareConfig

__version__ = "0.1.0"
