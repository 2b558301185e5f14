"""HTTP client for the tailorDesk backend REST API.

The backend owns orders, payments, and shop scoping. This client only fetches
already-scoped records for the dashboard and translates transport failures
into a single `BackendError`.
"""

from __future__ import annotations

import json
import urllib.parse
import urllib.request
from collections.abc import Mapping
from datetime import UTC

from django.conf import settings

from dashboard.dto import Window


class BackendError(RuntimeError):
    """Raised when the backend API cannot be reached or returns unusable data."""


class BackendClient:
    """Minimal read-only client for the orders and payments endpoints."""

    def __init__(self, base_url: str, *, token: str | None = None, timeout: float = 15) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. `https://api.example.com/api`.
            token: Optional bearer token sent as `Authorization`.
            timeout: Socket timeout in seconds.
        """

        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    @classmethod
    def from_settings(cls, *, token: str | None = None) -> "BackendClient":
        """Build a client from Django settings, optionally overriding the token."""

        return cls(
            settings.TAILORDESK_API_BASE_URL,
            token=token or settings.TAILORDESK_API_TOKEN,
            timeout=settings.TAILORDESK_API_TIMEOUT_SECONDS,
        )

    def fetch_orders(self, shop_id: str) -> list[dict]:
        """Return raw order records for a shop.

        Orders tagged with another `shopId` are filtered out.

        Raises:
            BackendError: When the request fails or the payload is not a list.
        """

        payload = self._get_json("/orders", {"shopId": shop_id})
        if not isinstance(payload, list):
            raise BackendError("Orders endpoint returned an unexpected payload.")
        return [
            order
            for order in payload
            if isinstance(order, Mapping) and order.get("shopId") in (None, shop_id)
        ]

    def fetch_payments(self, shop_id: str, start_iso: str, end_iso: str) -> list[dict]:
        """Return raw payment records for a shop within an ISO time range.

        Raises:
            BackendError: When the request fails or the payload has no payment list.
        """

        payload = self._get_json("/payments", {"shopId": shop_id, "start": start_iso, "end": end_iso})
        if isinstance(payload, Mapping):
            payload = payload.get("payments")
        if not isinstance(payload, list):
            raise BackendError("Payments endpoint returned an unexpected payload.")
        return [payment for payment in payload if isinstance(payment, Mapping)]

    def _get_json(self, path: str, params: Mapping[str, str]) -> object:
        """Perform a GET request and decode the JSON body."""

        url = f"{self.base_url}{path}?{urllib.parse.urlencode(params)}"
        headers = {"Accept": "application/json", "User-Agent": "tailorDesk/dashboard"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        request = urllib.request.Request(url, headers=headers)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                body = response.read().decode("utf-8", errors="replace")
        except OSError as exc:  # URLError, HTTPError, timeouts
            raise BackendError(f"Failed to fetch {path}: {exc}") from exc
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise BackendError(f"Invalid JSON from {path}.") from exc


def window_iso_bounds(window: Window) -> tuple[str, str]:
    """Return `(start, end)` UTC ISO-8601 strings for the payments query.

    Naive window bounds are interpreted as host-local time.
    """

    return (
        window.start.astimezone(UTC).isoformat().replace("+00:00", "Z"),
        window.end.astimezone(UTC).isoformat().replace("+00:00", "Z"),
    )
