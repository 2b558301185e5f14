"""Reconciliation of order-sourced and payment-sourced buckets.

Orders and payments describe overlapping money: a payment is usually collected
against an order that is also present. Buckets are therefore merged by strict
precedence, never summed.
"""

from __future__ import annotations

from collections.abc import Mapping

from .dto import Bucket


def reconcile_buckets(
    order_buckets: Mapping[str, Bucket],
    payment_buckets: Mapping[str, Bucket],
) -> dict[str, Bucket]:
    """Merge two bucket maps under an order-first precedence rule.

    Args:
        order_buckets: Buckets accumulated from order records.
        payment_buckets: Buckets accumulated from payment records, using the same
            key scheme.

    Returns:
        A new mapping covering every key present in either input. For each key
        the order bucket wins when its amount is positive, then the payment
        bucket when its amount is positive, otherwise the merged bucket is empty.
    """

    merged: dict[str, Bucket] = {}
    for key in [*order_buckets, *(k for k in payment_buckets if k not in order_buckets)]:
        merged[key] = reconcile_bucket(order_buckets.get(key), payment_buckets.get(key))
    return merged


def reconcile_bucket(order_bucket: Bucket | None, payment_bucket: Bucket | None) -> Bucket:
    """Pick the winning bucket for a single key."""

    if order_bucket is not None and order_bucket.amount_sum > 0:
        return order_bucket
    if payment_bucket is not None and payment_bucket.amount_sum > 0:
        return payment_bucket
    return Bucket()
