"""DTO types returned by the dashboard engine.

DTOs are plain, immutable data containers used to transport aggregation
results to the rendering layer. They intentionally avoid any Django/ORM
dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class Window:
    """An inclusive, day-normalized time window.

    Attributes:
        start: Midnight (local) of the first day in the window.
        end: Last instant (local) of the final day in the window.
    """

    start: datetime
    end: datetime

    @property
    def start_date(self) -> date:
        """Return the first calendar day covered by the window."""

        return self.start.date()

    @property
    def end_date(self) -> date:
        """Return the last calendar day covered by the window."""

        return self.end.date()

    @property
    def span_days(self) -> int:
        """Return the number of calendar days covered (inclusive)."""

        return (self.end_date - self.start_date).days + 1

    def contains(self, moment: datetime) -> bool:
        """Return True when `moment` falls inside the window (boundary-inclusive)."""

        return self.start <= moment <= self.end


@dataclass(frozen=True, slots=True)
class ResolvedRange:
    """Windows resolved for one selector.

    Attributes:
        bar_window: Window used for earnings bucketing.
        classify_window: Window used for category classification. Only differs
            from `bar_window` for the Yesterday selector.
    """

    bar_window: Window
    classify_window: Window


@dataclass(frozen=True, slots=True)
class CustomRange:
    """Caller-supplied bounds for the Custom selector.

    Attributes:
        start: First day (or any instant within it).
        end: Last day (or any instant within it).
    """

    start: date | datetime
    end: date | datetime


@dataclass(frozen=True, slots=True)
class EarningPoint:
    """A canonical `{timestamp, amount}` pair derived from a raw record.

    Attributes:
        timestamp: Local timestamp of the order or payment.
        amount: Amount attributed to the record (may be negative before bucketing).
    """

    timestamp: datetime
    amount: float


@dataclass(frozen=True, slots=True)
class Bucket:
    """Accumulated values for a single bucket key.

    Attributes:
        amount_sum: Sum of clamped record amounts.
        record_count: Number of records accumulated into the bucket.
    """

    amount_sum: float = 0.0
    record_count: int = 0


@dataclass(frozen=True)
class DisplaySeries:
    """Chart-ready labels and values.

    Attributes:
        labels: Display labels, index-aligned with `values`.
        values: Rounded integer values.
        data_mask: True where the slot holds real data; False for padding and
            spacer slots.
        padding: Number of padding slots on each side of the series.
    """

    labels: tuple[str, ...] = ()
    values: tuple[int, ...] = ()
    data_mask: tuple[bool, ...] = ()
    padding: int = 0

    def total(self) -> int:
        """Return the sum over data slots only."""

        return sum(value for value, is_data in zip(self.values, self.data_mask) if is_data)

    def average(self) -> float | None:
        """Return the mean over data slots, or None when there are none."""

        data = [value for value, is_data in zip(self.values, self.data_mask) if is_data]
        if not data:
            return None
        return sum(data) / len(data)

    def without_padding(self) -> "DisplaySeries":
        """Return a copy with the symmetric padding slots removed."""

        if self.padding == 0:
            return self
        stop = len(self.labels) - self.padding
        return DisplaySeries(
            labels=self.labels[self.padding : stop],
            values=self.values[self.padding : stop],
            data_mask=self.data_mask[self.padding : stop],
            padding=0,
        )

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "labels": list(self.labels),
            "values": list(self.values),
            "total": self.total(),
        }


@dataclass(frozen=True, slots=True)
class CategoryCounts:
    """True order counts per category within a classification window.

    Attributes:
        new_stitch: Orders classified as new stitching work.
        alteration: Orders classified as alterations.
        delivered: Orders in the window whose status is DELIVERED.
    """

    new_stitch: int = 0
    alteration: int = 0
    delivered: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return the two category counts keyed by category id."""

        return {"new_stitch": self.new_stitch, "alteration": self.alteration}


@dataclass(frozen=True, slots=True)
class PieSlices:
    """Numeric slice weights handed to a pie renderer.

    Attributes:
        new_stitch: Slice weight for new stitching work.
        alteration: Slice weight for alterations.
    """

    new_stitch: float
    alteration: float


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Category counts plus rendering weights for the pie chart.

    Attributes:
        counts: True integer counts, shown as text.
        slices: Epsilon-adjusted weights, used only for drawing.
    """

    counts: CategoryCounts
    slices: PieSlices

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "counts": self.counts.as_dict(),
            "delivered": self.counts.delivered,
            "slices": {"new_stitch": self.slices.new_stitch, "alteration": self.slices.alteration},
        }
