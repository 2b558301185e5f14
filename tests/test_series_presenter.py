"""Unit tests for series ordering, labeling, rounding, and padding."""

from __future__ import annotations

from datetime import date, timezone

import pytest

from dashboard.dto import Bucket
from dashboard.presenter import present_series, round_half_up
from dashboard.selectors import RangeSelector
from dashboard.windows import day_window

pytestmark = pytest.mark.unit


def test_today_is_centered_with_padding() -> None:
    """A single Today bar gets two empty slots on each side."""

    window = day_window(date(2024, 3, 13), date(2024, 3, 13), tz=timezone.utc)
    series = present_series({"2024-03-13": Bucket(amount_sum=499.6, record_count=1)}, selector=RangeSelector.today, window=window)
    assert series.labels == ("", "", "Today", "", "")
    assert series.values == (0, 0, 500, 0, 0)
    assert series.padding == 2
    assert series.total() == 500
    assert series.average() == 500


def test_yesterday_has_spacer_between_bars() -> None:
    """Yesterday and Today are separated by a non-data spacer slot."""

    window = day_window(date(2024, 3, 12), date(2024, 3, 13), tz=timezone.utc)
    buckets = {"2024-03-12": Bucket(amount_sum=40.0, record_count=1), "2024-03-13": Bucket(amount_sum=60.0, record_count=1)}
    series = present_series(buckets, selector=RangeSelector.yesterday, window=window)
    core = series.without_padding()
    assert core.labels == ("Yesterday", "", "Today")
    assert core.values == (40, 0, 60)
    assert len(series.labels) == 7
    assert series.average() == 50


def test_last_week_uses_weekday_labels_ending_today() -> None:
    """Weekday labels rotate so the final slot is today's weekday."""

    window = day_window(date(2024, 3, 7), date(2024, 3, 13), tz=timezone.utc)
    series = present_series({}, selector=RangeSelector.last_week, window=window)
    assert series.labels == ("Thu", "Fri", "Sat", "Sun", "Mon", "Tue", "Wed")
    assert series.values == (0,) * 7
    assert series.padding == 0


def test_last_month_labels_week_starts() -> None:
    """Week buckets are labeled by their Monday as `DD Mon`."""

    window = day_window(date(2024, 2, 1), date(2024, 2, 29), tz=timezone.utc)
    series = present_series({"2024-02-05": Bucket(amount_sum=12.0, record_count=1)}, selector=RangeSelector.last_month, window=window)
    assert series.labels == ("29 Jan", "05 Feb", "12 Feb", "19 Feb", "26 Feb")
    assert series.values == (0, 12, 0, 0, 0)


def test_last_6_months_labels_months_oldest_first() -> None:
    """Month buckets use short month names in chronological order."""

    window = day_window(date(2023, 9, 1), date(2024, 2, 10), tz=timezone.utc)
    series = present_series({"2024-01": Bucket(amount_sum=1000.4, record_count=3)}, selector=RangeSelector.last_6_months, window=window)
    assert series.labels == ("Sep", "Oct", "Nov", "Dec", "Jan", "Feb")
    assert series.values == (0, 0, 0, 0, 1000, 0)


def test_custom_labels_by_granularity() -> None:
    """Short custom ranges show MM-DD; long ones show month and year."""

    short = present_series({}, selector=RangeSelector.custom, window=day_window(date(2024, 2, 27), date(2024, 3, 2), tz=None))
    assert short.labels == ("02-27", "02-28", "02-29", "03-01", "03-02")

    long = present_series({}, selector=RangeSelector.custom, window=day_window(date(2023, 12, 1), date(2024, 1, 20), tz=None))
    assert long.labels == ("Dec 2023", "Jan 2024")


def test_short_custom_range_is_not_padded() -> None:
    """Only Today and Yesterday are centered; short custom ranges keep their own slots."""

    series = present_series({}, selector=RangeSelector.custom, window=day_window(date(2024, 3, 1), date(2024, 3, 2), tz=None))
    assert series.labels == ("03-01", "03-02")
    assert series.data_mask == (True, True)
    assert series.padding == 0

    months = present_series({}, selector=RangeSelector.custom, window=day_window(date(2023, 12, 1), date(2024, 1, 20), tz=None))
    assert months.padding == 0
    assert months.data_mask == (True, True)


def test_padding_is_excluded_from_totals() -> None:
    """Padding and spacer slots never contribute to averages."""

    window = day_window(date(2024, 3, 12), date(2024, 3, 13), tz=timezone.utc)
    series = present_series({"2024-03-13": Bucket(amount_sum=30.0, record_count=1)}, selector=RangeSelector.yesterday, window=window)
    assert series.total() == 30
    assert series.average() == 15


@pytest.mark.parametrize(("value", "expected"), [(0.0, 0), (2.5, 3), (2.4999, 2), (199.5, 200), (1e6 + 0.49, 1000000)])
def test_round_half_up(value: float, expected: int) -> None:
    """Halves round away from zero for non-negative amounts."""

    assert round_half_up(value) == expected


def test_rounding_happens_after_accumulation() -> None:
    """Fractional amounts are summed before the single final rounding step."""

    window = day_window(date(2024, 3, 13), date(2024, 3, 13), tz=timezone.utc)
    series = present_series({"2024-03-13": Bucket(amount_sum=0.4 + 0.4 + 0.4, record_count=3)}, selector=RangeSelector.today, window=window)
    assert series.values[2] == 1


def test_round_half_up_handles_huge_and_non_finite_sums() -> None:
    """Sums beyond the default decimal precision round exactly; overflowed sums chart as 0."""

    assert round_half_up(1e30) == 10**30
    assert round_half_up(float("inf")) == 0
    assert round_half_up(float("nan")) == 0
