"""Service-layer functions for the core app.

Services in `core` coordinate the backend API client with the pure dashboard
engine. A failed fetch degrades to an empty record list so charts render as
"no data" instead of erroring.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from core.api_client import BackendClient, BackendError, window_iso_bounds
from dashboard.dto import CategorySummary, CustomRange, DisplaySeries, Window
from dashboard.engine import compute_category_summary, compute_earnings_series
from dashboard.selectors import RangeSelector
from dashboard.windows import resolve_custom

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EarningsChart:
    """Earnings bar chart data for one shop.

    Attributes:
        selector: Range selector used.
        window: Bar window covered by the series.
        series: Chart-ready labels and values.
    """

    selector: RangeSelector
    window: Window
    series: DisplaySeries

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "range": self.selector.value,
            "window": {"start": self.window.start.isoformat(), "end": self.window.end.isoformat()},
            **self.series.as_json(),
        }


@dataclass(frozen=True)
class CategoryChart:
    """Category pie chart data for one shop.

    Attributes:
        selector: Range selector used.
        window: Classification window.
        summary: True counts plus epsilon-adjusted slice weights.
    """

    selector: RangeSelector
    window: Window
    summary: CategorySummary

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "range": self.selector.value,
            "window": {"start": self.window.start.isoformat(), "end": self.window.end.isoformat()},
            **self.summary.as_json(),
        }


def build_earnings_chart(
    *,
    client: BackendClient,
    shop_id: str,
    selector: RangeSelector,
    custom_range: CustomRange | None = None,
    now: datetime | None = None,
) -> EarningsChart:
    """Fetch orders and payments for a shop and compute the earnings series.

    Raises:
        InvalidRangeError: When a custom range is inverted.
    """

    now = now or timezone.localtime()
    window = resolve_custom(custom_range, selector, now=now).bar_window
    orders = _fetch_orders(client, shop_id)
    try:
        payments = client.fetch_payments(shop_id, *window_iso_bounds(window))
    except BackendError as exc:
        logger.warning("Payments fetch failed for shop %s; charting without payments: %s", shop_id, exc)
        payments = []
    series = compute_earnings_series(orders, payments, selector, custom_range, now=now)
    return EarningsChart(selector=selector, window=window, series=series)


def build_category_chart(
    *,
    client: BackendClient,
    shop_id: str,
    selector: RangeSelector,
    custom_range: CustomRange | None = None,
    now: datetime | None = None,
) -> CategoryChart:
    """Fetch orders for a shop and compute category counts.

    Raises:
        InvalidRangeError: When a custom range is inverted.
    """

    now = now or timezone.localtime()
    window = resolve_custom(custom_range, selector, now=now).classify_window
    orders = _fetch_orders(client, shop_id)
    summary = compute_category_summary(orders, selector, custom_range, now=now)
    return CategoryChart(selector=selector, window=window, summary=summary)


def _fetch_orders(client: BackendClient, shop_id: str) -> list[dict]:
    """Fetch orders, degrading to an empty list on backend failure."""

    try:
        return client.fetch_orders(shop_id)
    except BackendError as exc:
        logger.warning("Orders fetch failed for shop %s; charting without orders: %s", shop_id, exc)
        return []
