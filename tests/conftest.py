"""Pytest fixtures shared across dashboard tests."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

import pytest


@pytest.fixture
def now() -> datetime:
    """Return a fixed aware reference instant (Wednesday 2024-03-13, 15:30 UTC)."""

    return datetime(2024, 3, 13, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_order():
    """Return a factory for raw order records shaped like backend JSON."""

    def _make(order_id: str = "o1", *, created_at: str | None = None, **fields: object) -> dict[str, object]:
        record: dict[str, object] = {"id": order_id, "shopId": "shop-1", "status": "PENDING"}
        if created_at is not None:
            record["createdAt"] = created_at
        record.update(fields)
        return record

    return _make


@pytest.fixture
def make_payment():
    """Return a factory for raw payment records shaped like backend JSON."""

    def _make(payment_id: str = "p1", *, paid_at: str | None, amount: object, order_id: str = "o1") -> dict[str, object]:
        return {"id": payment_id, "orderId": order_id, "shopId": "shop-1", "amount": amount, "paidAt": paid_at}

    return _make


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests over the dashboard engine.
    - `integration`: tests touching Django views, commands, settings, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
