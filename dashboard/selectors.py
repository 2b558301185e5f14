"""Range selector and bucket granularity definitions.

RangeSelector is the user-facing time-window choice shared by the earnings bar
chart and the category pie chart. Granularity is the bucketing scheme derived
from a selector (and, for custom ranges, from the window span).
"""

from __future__ import annotations

from enum import StrEnum


class RangeSelector(StrEnum):
    """Selectable dashboard time range.

    Values are stable identifiers used by query strings and the backend UI.
    """

    today = "today"
    yesterday = "yesterday"
    last_week = "last_week"
    last_month = "last_month"
    last_6_months = "last_6_months"
    custom = "custom"


class Granularity(StrEnum):
    """Bucket width used when aggregating records."""

    day = "day"
    week = "week"
    month = "month"


_LEGACY_ALIASES: dict[str, RangeSelector] = {
    "one_week": RangeSelector.last_week,
    "one_month": RangeSelector.last_month,
    "three_months": RangeSelector.last_6_months,
}


def parse_selector(value: RangeSelector | str) -> RangeSelector:
    """Coerce a selector value or legacy identifier into a RangeSelector.

    Args:
        value: A RangeSelector, its string value, or a legacy mobile-app id
            (`one_week`, `one_month`, `three_months`).

    Returns:
        The matching RangeSelector.

    Raises:
        ValueError: When the value is not a known selector.
    """

    if isinstance(value, RangeSelector):
        return value
    key = str(value).strip().lower()
    if key in _LEGACY_ALIASES:
        return _LEGACY_ALIASES[key]
    try:
        return RangeSelector(key)
    except ValueError:
        raise ValueError(f"Unknown range selector: {value!r}.") from None
