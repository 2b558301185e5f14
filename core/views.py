"""JSON views serving dashboard chart data."""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from core.api_client import BackendClient
from core.forms import DashboardRangeForm
from core.services import build_category_chart, build_earnings_chart
from dashboard.windows import InvalidRangeError


@require_GET
def earnings_chart(request: HttpRequest, shop_id: str) -> JsonResponse:
    """Return the earnings bar series for a shop and range."""

    form = DashboardRangeForm(request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    try:
        chart = build_earnings_chart(
            client=_client_for(request),
            shop_id=shop_id,
            selector=form.selector(),
            custom_range=form.custom_range(),
        )
    except InvalidRangeError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    return JsonResponse(chart.as_json())


@require_GET
def category_chart(request: HttpRequest, shop_id: str) -> JsonResponse:
    """Return category counts and pie slice weights for a shop and range."""

    form = DashboardRangeForm(request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    try:
        chart = build_category_chart(
            client=_client_for(request),
            shop_id=shop_id,
            selector=form.selector(),
            custom_range=form.custom_range(),
        )
    except InvalidRangeError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    return JsonResponse(chart.as_json())


def _client_for(request: HttpRequest) -> BackendClient:
    """Build a backend client, forwarding the caller's bearer token when present."""

    header = request.headers.get("Authorization", "")
    token = header[len("Bearer ") :].strip() if header.startswith("Bearer ") else None
    return BackendClient.from_settings(token=token)
