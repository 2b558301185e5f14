"""Bucketing of earning points into day, week, or month buckets.

Granularity is an explicit dispatch on the selector. Custom ranges are the only
case that also looks at the window span: short custom windows are bucketed per
day, long ones per month.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from .dto import Bucket, EarningPoint, Window
from .selectors import Granularity, RangeSelector, parse_selector
from .windows import shift_months


CUSTOM_DAILY_MAX_DAYS = 31

GRANULARITY_BY_SELECTOR: dict[RangeSelector, Granularity] = {
    RangeSelector.today: Granularity.day,
    RangeSelector.yesterday: Granularity.day,
    RangeSelector.last_week: Granularity.day,
    RangeSelector.last_month: Granularity.week,
    RangeSelector.last_6_months: Granularity.month,
}


def granularity_for(selector: RangeSelector | str, *, span_days: int) -> Granularity:
    """Return the bucket granularity for a selector and window span.

    Args:
        selector: Active range selector.
        span_days: Inclusive number of days in the bar window.

    Returns:
        Granularity used for bucket keys.
    """

    selector = parse_selector(selector)
    if selector is RangeSelector.custom:
        if span_days <= CUSTOM_DAILY_MAX_DAYS:
            return Granularity.day
        return Granularity.month
    return GRANULARITY_BY_SELECTOR[selector]


def bucket_key(day: date, granularity: Granularity) -> str:
    """Return the bucket key containing a calendar day.

    Keys are `YYYY-MM-DD` for days, the ISO date of the week's Monday for weeks,
    and `YYYY-MM` for months.
    """

    if granularity is Granularity.day:
        return day.isoformat()
    if granularity is Granularity.week:
        return week_start(day).isoformat()
    return f"{day.year:04d}-{day.month:02d}"


def week_start(day: date) -> date:
    """Return the Monday on or before `day`."""

    return day - timedelta(days=day.weekday())


def bucket_keys(window: Window, granularity: Granularity) -> tuple[str, ...]:
    """Return the canonical, chronologically ordered keys covering a window."""

    return tuple(bucket_key(start, granularity) for start in bucket_starts(window, granularity))


def bucket_starts(window: Window, granularity: Granularity) -> tuple[date, ...]:
    """Return the first calendar day of every bucket covering a window.

    Week buckets start at the Monday on or before the window start, so a partial
    leading week is still represented.
    """

    first = window.start_date
    last = window.end_date
    starts: list[date] = []
    if granularity is Granularity.day:
        cursor = first
        step = timedelta(days=1)
        while cursor <= last:
            starts.append(cursor)
            cursor += step
    elif granularity is Granularity.week:
        cursor = week_start(first)
        step = timedelta(days=7)
        while cursor <= last:
            starts.append(cursor)
            cursor += step
    else:
        cursor = first.replace(day=1)
        while cursor <= last:
            starts.append(cursor)
            cursor = shift_months(cursor, 1)
    return tuple(starts)


def bucket_points(
    points: Iterable[EarningPoint],
    *,
    selector: RangeSelector | str,
    window: Window,
) -> dict[str, Bucket]:
    """Accumulate earning points into zero-filled buckets.

    Args:
        points: Canonical points from a single source (orders or payments).
        selector: Active range selector.
        window: Bar window the points were normalized against.

    Returns:
        A new mapping of bucket key -> Bucket, containing every canonical key for
        the window in chronological order. Negative amounts are clamped to 0 and
        still count as a record.
    """

    granularity = granularity_for(selector, span_days=window.span_days)
    totals: dict[str, float] = {key: 0.0 for key in bucket_keys(window, granularity)}
    counts: dict[str, int] = dict.fromkeys(totals, 0)
    for point in points:
        key = bucket_key(point.timestamp.date(), granularity)
        totals[key] = totals.get(key, 0.0) + max(point.amount, 0.0)
        counts[key] = counts.get(key, 0) + 1
    return {key: Bucket(amount_sum=totals[key], record_count=counts[key]) for key in totals}
