"""Print the dashboard charts for a shop using live backend data."""

from __future__ import annotations

import json
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from core.api_client import BackendClient
from core.services import build_category_chart, build_earnings_chart
from dashboard.dto import CustomRange
from dashboard.selectors import RangeSelector
from dashboard.windows import InvalidRangeError


class Command(BaseCommand):
    """Fetch orders and payments for a shop and print both chart payloads as JSON."""

    help = "Print earnings and category chart data for a shop."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("shop_id", help="Backend shop identifier.")
        parser.add_argument(
            "--range",
            choices=[selector.value for selector in RangeSelector],
            default=RangeSelector.last_week.value,
            help="Range selector applied to both charts.",
        )
        parser.add_argument("--start", type=date.fromisoformat, default=None, help="Custom start date (YYYY-MM-DD).")
        parser.add_argument("--end", type=date.fromisoformat, default=None, help="Custom end date (YYYY-MM-DD).")

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        selector = RangeSelector(options["range"])
        start: date | None = options["start"]
        end: date | None = options["end"]

        custom_range = None
        if selector is RangeSelector.custom:
            if start is None or end is None:
                raise CommandError("--range custom requires both --start and --end.")
            custom_range = CustomRange(start=start, end=end)

        client = BackendClient.from_settings()
        try:
            earnings = build_earnings_chart(
                client=client, shop_id=options["shop_id"], selector=selector, custom_range=custom_range
            )
            categories = build_category_chart(
                client=client, shop_id=options["shop_id"], selector=selector, custom_range=custom_range
            )
        except InvalidRangeError as exc:
            raise CommandError(str(exc)) from exc

        payload = {"earnings": earnings.as_json(), "categories": categories.as_json()}
        self.stdout.write(json.dumps(payload, indent=2))
        return None
