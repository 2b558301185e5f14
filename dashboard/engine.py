"""Orchestration entry points for the dashboard engine.

The engine is a pure, non-Django module: it accepts already-fetched records and
returns DTOs. Every call recomputes from scratch, so two charts on the same
screen never share intermediate bucket maps.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .buckets import bucket_points
from .classify import classify_orders, pie_slices
from .dto import CategorySummary, CustomRange, DisplaySeries
from .presenter import present_series
from .reconcile import reconcile_buckets
from .records import normalize_orders, normalize_payments
from .selectors import RangeSelector, parse_selector
from .windows import local_now, resolve_custom


def compute_earnings_series(
    orders: Iterable[object],
    payments: Iterable[object],
    selector: RangeSelector | str,
    custom_range: CustomRange | None = None,
    *,
    now: datetime | None = None,
) -> DisplaySeries:
    """Compute the earnings bar series for a selector.

    Args:
        orders: Raw order records for the shop.
        payments: Raw payment records for the shop.
        selector: Active bar-chart range selector.
        custom_range: Bounds for the Custom selector.
        now: Reference instant; defaults to the current local time.

    Returns:
        DisplaySeries with order amounts taking precedence over payments per bucket.

    Raises:
        InvalidRangeError: When a custom range is missing or inverted.
    """

    selector = parse_selector(selector)
    window = resolve_custom(custom_range, selector, now=_now(now)).bar_window

    order_buckets = bucket_points(normalize_orders(orders, window), selector=selector, window=window)
    payment_buckets = bucket_points(normalize_payments(payments, window), selector=selector, window=window)
    merged = reconcile_buckets(order_buckets, payment_buckets)
    return present_series(merged, selector=selector, window=window)


def compute_category_summary(
    orders: Iterable[object],
    selector: RangeSelector | str,
    custom_range: CustomRange | None = None,
    *,
    now: datetime | None = None,
) -> CategorySummary:
    """Compute category counts and pie slice weights for a selector."""

    selector = parse_selector(selector)
    window = resolve_custom(custom_range, selector, now=_now(now)).classify_window
    counts = classify_orders(orders, window)
    return CategorySummary(counts=counts, slices=pie_slices(counts))


def compute_category_counts(
    orders: Iterable[object],
    selector: RangeSelector | str,
    custom_range: CustomRange | None = None,
    *,
    now: datetime | None = None,
) -> dict[str, int]:
    """Return `{"new_stitch": n, "alteration": m}` for a selector's classify window."""

    return compute_category_summary(orders, selector, custom_range, now=now).counts.as_dict()


def _now(now: datetime | None) -> datetime:
    """Return `now`, defaulting to the current time in the host zone."""

    if now is None:
        return local_now()
    return now
