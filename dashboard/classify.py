"""Order category classification for the status pie chart."""

from __future__ import annotations

from collections.abc import Iterable

from .dto import CategoryCounts, PieSlices, Window
from .records import field, order_timestamp


NEW_STITCH = "new_stitch"
ALTERATION = "alteration"
DELIVERED_STATUS = "DELIVERED"

PIE_EPSILON = 0.0001


def classify_orders(records: Iterable[object], window: Window) -> CategoryCounts:
    """Count orders per category inside a classification window.

    Args:
        records: Raw order records.
        window: Classification window (yesterday only for the Yesterday selector).

    Returns:
        CategoryCounts with true integer counts. Orders with a missing or
        unrecognized category count as new stitching work, matching records
        created before categories were tagged.
    """

    new_stitch = 0
    alteration = 0
    delivered = 0
    for record in records:
        timestamp = order_timestamp(record, window)
        if timestamp is None or not window.contains(timestamp):
            continue
        if order_category(record) == ALTERATION:
            alteration += 1
        else:
            new_stitch += 1
        if str(field(record, "status") or "").upper() == DELIVERED_STATUS:
            delivered += 1
    return CategoryCounts(new_stitch=new_stitch, alteration=alteration, delivered=delivered)


def order_category(record: object) -> str:
    """Return the category id of an order.

    Reads `category` first, then the legacy `orderType` (`STITCHING` /
    `ALTERATION`).
    """

    for name in ("category", "orderType"):
        value = field(record, name)
        if isinstance(value, str) and value.strip():
            if value.strip().lower() == ALTERATION:
                return ALTERATION
            return NEW_STITCH
    return NEW_STITCH


def pie_slices(counts: CategoryCounts, *, epsilon: float = PIE_EPSILON) -> PieSlices:
    """Return pie slice weights, substituting `epsilon` when both counts are zero."""

    if counts.new_stitch == 0 and counts.alteration == 0:
        return PieSlices(new_stitch=epsilon, alteration=epsilon)
    return PieSlices(new_stitch=float(counts.new_stitch), alteration=float(counts.alteration))
