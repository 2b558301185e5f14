"""Normalization of raw backend records into canonical earning points.

Raw orders and payments arrive as already-deserialized JSON objects from the
backend API. Their shape is loosely enforced upstream, so every field is read
defensively and records with unusable timestamps are dropped rather than
failing the whole aggregation pass.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal

from .dto import EarningPoint, Window
from .windows import to_local

logger = logging.getLogger(__name__)

ORDER_TIMESTAMP_FIELDS = ("orderDate", "createdAt")
ORDER_LINE_ITEM_FIELDS = ("lineItems", "clothes")


def normalize_orders(records: Iterable[object], window: Window) -> tuple[EarningPoint, ...]:
    """Convert raw order records into earning points inside a window.

    Args:
        records: Raw order records (JSON mappings or attribute objects).
        window: Inclusive window; records outside it are excluded.

    Returns:
        Tuple of EarningPoint values in input order.

    Notes:
        The amount is `totalAmount` when it is a number, otherwise the sum of
        line item `materialCost` values, otherwise 0.
    """

    points: list[EarningPoint] = []
    for record in records:
        timestamp = order_timestamp(record, window)
        if timestamp is None or not window.contains(timestamp):
            continue
        points.append(EarningPoint(timestamp=timestamp, amount=order_amount(record)))
    return tuple(points)


def normalize_payments(records: Iterable[object], window: Window) -> tuple[EarningPoint, ...]:
    """Convert raw payment records into earning points inside a window.

    Args:
        records: Raw payment records (JSON mappings or attribute objects).
        window: Inclusive window; records outside it are excluded.

    Returns:
        Tuple of EarningPoint values in input order.
    """

    points: list[EarningPoint] = []
    for record in records:
        raw = field(record, "paidAt")
        timestamp = parse_timestamp(raw, window)
        if timestamp is None:
            logger.debug("Dropping payment %r: unparsable paidAt %r.", field(record, "id"), raw)
            continue
        if not window.contains(timestamp):
            continue
        points.append(EarningPoint(timestamp=timestamp, amount=coerce_amount(field(record, "amount"))))
    return tuple(points)


def order_timestamp(record: object, window: Window) -> datetime | None:
    """Return the local timestamp of an order, or None when unusable."""

    raw = None
    for name in ORDER_TIMESTAMP_FIELDS:
        raw = field(record, name)
        if raw:
            break
    timestamp = parse_timestamp(raw, window)
    if timestamp is None:
        logger.debug("Dropping order %r: unparsable timestamp %r.", field(record, "id"), raw)
    return timestamp


def order_amount(record: object) -> float:
    """Resolve the amount of a single order record."""

    total = field(record, "totalAmount")
    if _is_number(total):
        return float(total)

    items = None
    for name in ORDER_LINE_ITEM_FIELDS:
        items = field(record, name)
        if items:
            break
    if not isinstance(items, (list, tuple)):
        return 0.0
    return float(sum(coerce_amount(field(item, "materialCost")) for item in items))


def parse_timestamp(value: object, window: Window) -> datetime | None:
    """Parse a raw timestamp into the window's local zone.

    Args:
        value: ISO-8601 string, datetime, or date.
        window: Window whose zone defines local time.

    Returns:
        Local datetime, or None when the value cannot be parsed or falls
        outside the representable range once converted to local time.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    try:
        return to_local(parsed, window.start.tzinfo)
    except (OverflowError, ValueError):
        return None


def coerce_amount(value: object) -> float:
    """Coerce a raw amount into a float, returning 0.0 when non-numeric."""

    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return 0.0
        if math.isfinite(parsed):
            return parsed
    return 0.0


def field(record: object, name: str) -> object:
    """Read a field from a mapping or attribute-style record."""

    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _is_number(value: object) -> bool:
    """Return True for finite int/float/Decimal values (bools excluded)."""

    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return math.isfinite(value)
