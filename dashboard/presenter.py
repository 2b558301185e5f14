"""Presentation of merged buckets as chart-ready label/value series.

The presenter owns display order and labels. Labels come from fixed English
tables so output does not depend on the host locale.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .buckets import bucket_key, bucket_starts, granularity_for
from .dto import Bucket, DisplaySeries, Window
from .selectors import Granularity, RangeSelector, parse_selector

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

TODAY_LABEL = "Today"
YESTERDAY_LABEL = "Yesterday"
SPACER_LABEL = ""

PADDED_SELECTORS = frozenset({RangeSelector.today, RangeSelector.yesterday})
PADDING_SLOTS = 2


def present_series(
    buckets: Mapping[str, Bucket],
    *,
    selector: RangeSelector | str,
    window: Window,
) -> DisplaySeries:
    """Order, label, round, and pad merged buckets for a bar chart.

    Args:
        buckets: Reconciled buckets keyed by bucket key.
        selector: Active range selector.
        window: Bar window the buckets were produced for.

    Returns:
        DisplaySeries with a constant shape for the selector and window, whether
        or not any bucket holds data.
    """

    selector = parse_selector(selector)
    granularity = granularity_for(selector, span_days=window.span_days)
    starts = bucket_starts(window, granularity)

    def amount(start: date) -> float:
        bucket = buckets.get(bucket_key(start, granularity))
        return bucket.amount_sum if bucket is not None else 0.0

    slots: list[tuple[str, float, bool]]
    if selector is RangeSelector.today:
        slots = [(TODAY_LABEL, amount(starts[-1]), True)]
    elif selector is RangeSelector.yesterday:
        slots = [
            (YESTERDAY_LABEL, amount(starts[0]), True),
            (SPACER_LABEL, 0.0, False),
            (TODAY_LABEL, amount(starts[-1]), True),
        ]
    else:
        slots = [(bucket_label(start, selector=selector, granularity=granularity), amount(start), True) for start in starts]

    padding = PADDING_SLOTS if selector in PADDED_SELECTORS else 0
    pad = [(SPACER_LABEL, 0.0, False)] * padding
    slots = [*pad, *slots, *pad]

    return DisplaySeries(
        labels=tuple(label for label, _, _ in slots),
        values=tuple(round_half_up(value) for _, value, _ in slots),
        data_mask=tuple(is_data for _, _, is_data in slots),
        padding=padding,
    )


def bucket_label(start: date, *, selector: RangeSelector, granularity: Granularity) -> str:
    """Return the display label for a bucket starting on `start`."""

    if granularity is Granularity.week:
        return f"{start.day:02d} {MONTH_LABELS[start.month - 1]}"
    if granularity is Granularity.month:
        if selector is RangeSelector.custom:
            return f"{MONTH_LABELS[start.month - 1]} {start.year}"
        return MONTH_LABELS[start.month - 1]
    if selector is RangeSelector.last_week:
        return WEEKDAY_LABELS[start.weekday()]
    return f"{start.month:02d}-{start.day:02d}"


def round_half_up(value: float) -> int:
    """Round a non-negative amount to the nearest integer, halves rounding up.

    Non-finite sums (an overflowed accumulation) are charted as 0.
    """

    if not math.isfinite(value):
        logger.warning("Charting non-finite bucket sum %r as 0.", value)
        return 0
    with localcontext() as context:
        # Wide enough for every integer digit of the largest float.
        context.prec = 400
        return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
