"""Range resolution for dashboard charts.

This module turns a RangeSelector plus a reference instant into concrete,
day-normalized windows. It is pure (no Django imports) so windows can be
computed and tested deterministically for any `now`.
"""

from __future__ import annotations

import os
from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .dto import CustomRange, ResolvedRange, Window
from .selectors import RangeSelector, parse_selector


LAST_WEEK_DAYS = 7
LAST_MONTHS_COUNT = 6


class InvalidRangeError(ValueError):
    """Raised when a custom range cannot be resolved into a window."""


def local_now() -> datetime:
    """Return the current time in the host zone.

    A `TZ` naming an IANA zone yields a `ZoneInfo`, so windows that cross a DST
    change convert records with the offset in force on their own day. Otherwise
    the host's current fixed offset is used.
    """

    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        try:
            return datetime.now(ZoneInfo(name))
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return datetime.now().astimezone()


def to_local(moment: datetime, tz: tzinfo | None) -> datetime:
    """Express a timestamp in the local zone used for day boundaries.

    Args:
        moment: Timestamp to convert.
        tz: Local zone taken from the reference `now`; None means naive local time.

    Returns:
        `moment` converted into `tz`. Naive timestamps are assumed to already be
        local and are only tagged with `tz`.
    """

    if tz is None:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone().replace(tzinfo=None)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def day_window(first: date, last: date, *, tz: tzinfo | None) -> Window:
    """Build a Window spanning whole local days from `first` to `last`.

    Args:
        first: First calendar day (inclusive).
        last: Last calendar day (inclusive).
        tz: Local zone applied to both bounds.

    Returns:
        Window whose start is midnight of `first` and end is the last instant of `last`.
    """

    return Window(
        start=datetime.combine(first, time.min, tzinfo=tz),
        end=datetime.combine(last, time.max, tzinfo=tz),
    )


def shift_months(day: date, months: int) -> date:
    """Return the first day of the month `months` away from `day`'s month."""

    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def resolve_range(
    selector: RangeSelector | str,
    *,
    now: datetime,
    custom_start: date | datetime | None = None,
    custom_end: date | datetime | None = None,
) -> ResolvedRange:
    """Resolve a selector into bar and classification windows.

    Args:
        selector: Active range selector.
        now: Reference instant; its zone defines "local" for day boundaries.
        custom_start: First day of a custom range (Custom only).
        custom_end: Last day of a custom range (Custom only).

    Returns:
        ResolvedRange whose windows are equal for every selector except
        Yesterday, where the bar window also covers today.

    Raises:
        InvalidRangeError: For a Custom selector with missing bounds, or with a
            start after its end.
    """

    selector = parse_selector(selector)
    tz = now.tzinfo
    today = now.date()

    if selector is RangeSelector.today:
        window = day_window(today, today, tz=tz)
        return ResolvedRange(bar_window=window, classify_window=window)

    if selector is RangeSelector.yesterday:
        yesterday = today - timedelta(days=1)
        return ResolvedRange(
            bar_window=day_window(yesterday, today, tz=tz),
            classify_window=day_window(yesterday, yesterday, tz=tz),
        )

    if selector is RangeSelector.last_week:
        window = day_window(today - timedelta(days=LAST_WEEK_DAYS - 1), today, tz=tz)
        return ResolvedRange(bar_window=window, classify_window=window)

    if selector is RangeSelector.last_month:
        last_day = today.replace(day=1) - timedelta(days=1)
        window = day_window(last_day.replace(day=1), last_day, tz=tz)
        return ResolvedRange(bar_window=window, classify_window=window)

    if selector is RangeSelector.last_6_months:
        window = day_window(shift_months(today, -(LAST_MONTHS_COUNT - 1)), today, tz=tz)
        return ResolvedRange(bar_window=window, classify_window=window)

    if selector is RangeSelector.custom:
        if custom_start is None or custom_end is None:
            raise InvalidRangeError("A custom range requires both a start and an end.")
        first = _local_date(custom_start, tz)
        last = _local_date(custom_end, tz)
        if first > last:
            raise InvalidRangeError(
                f"Custom range start {first.isoformat()} is after end {last.isoformat()}."
            )
        window = day_window(first, last, tz=tz)
        return ResolvedRange(bar_window=window, classify_window=window)

    raise ValueError(f"Unhandled range selector: {selector!r}.")


def resolve_custom(custom_range: CustomRange | None, selector: RangeSelector, *, now: datetime) -> ResolvedRange:
    """Resolve a selector using optional CustomRange bounds."""

    if custom_range is None:
        return resolve_range(selector, now=now)
    return resolve_range(selector, now=now, custom_start=custom_range.start, custom_end=custom_range.end)


def _local_date(value: date | datetime, tz: tzinfo | None) -> date:
    """Return the local calendar day for a date or datetime bound."""

    if isinstance(value, datetime):
        return to_local(value, tz).date()
    return value
