"""Integration tests for the dashboard_snapshot management command."""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from django.core.management import CommandError, call_command

from core import services

pytestmark = pytest.mark.integration


class _StaticClient:
    """Backend double returning fixed records."""

    def fetch_orders(self, shop_id: str) -> list:
        return [{"id": "o1", "createdAt": "2024-03-02T09:00:00Z", "totalAmount": 75, "orderType": "ALTERATION"}]

    def fetch_payments(self, shop_id: str, start_iso: str, end_iso: str) -> list:
        return []


@pytest.fixture(autouse=True)
def _static_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the clock and replace the backend client."""

    monkeypatch.setattr(
        services,
        "timezone",
        SimpleNamespace(localtime=lambda: datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)),
    )
    monkeypatch.setattr(
        "core.management.commands.dashboard_snapshot.BackendClient.from_settings",
        staticmethod(lambda **_: _StaticClient()),
    )


def test_dashboard_snapshot_prints_both_charts() -> None:
    """The command prints earnings and category payloads as JSON."""

    out = io.StringIO()
    call_command("dashboard_snapshot", "shop-1", "--range", "custom", "--start", "2024-03-01", "--end", "2024-03-05", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["earnings"]["values"] == [0, 75, 0, 0, 0]
    assert payload["categories"]["counts"] == {"new_stitch": 0, "alteration": 1}


def test_dashboard_snapshot_requires_custom_bounds() -> None:
    """Custom ranges need both dates."""

    with pytest.raises(CommandError, match="--start and --end"):
        call_command("dashboard_snapshot", "shop-1", "--range", "custom", "--start", "2024-03-01")


def test_dashboard_snapshot_rejects_inverted_range() -> None:
    """Inverted custom ranges surface as CommandError."""

    with pytest.raises(CommandError, match="after end"):
        call_command("dashboard_snapshot", "shop-1", "--range", "custom", "--start", "2024-03-05", "--end", "2024-03-01")
