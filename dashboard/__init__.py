"""Pure dashboard aggregation package for tailorDesk.

This package turns fetched order and payment records into chart-ready series.
It must not import Django or perform any network or database I/O.
"""

from .dto import CustomRange, DisplaySeries
from .engine import compute_category_counts, compute_category_summary, compute_earnings_series
from .selectors import RangeSelector
from .windows import InvalidRangeError, resolve_range

__all__ = [
    "CustomRange",
    "DisplaySeries",
    "InvalidRangeError",
    "RangeSelector",
    "compute_category_counts",
    "compute_category_summary",
    "compute_earnings_series",
    "resolve_range",
]
