"""Forms for dashboard chart requests."""

from __future__ import annotations

from django import forms

from dashboard.dto import CustomRange
from dashboard.selectors import RangeSelector


RANGE_CHOICES = (
    (RangeSelector.today.value, "Today"),
    (RangeSelector.yesterday.value, "Yesterday"),
    (RangeSelector.last_week.value, "Last week"),
    (RangeSelector.last_month.value, "Last month"),
    (RangeSelector.last_6_months.value, "Last 6 months"),
    (RangeSelector.custom.value, "Custom"),
)


class DashboardRangeForm(forms.Form):
    """Validate the range selector and optional custom dates for a chart."""

    range = forms.ChoiceField(
        required=False,
        choices=RANGE_CHOICES,
        label="Range",
        help_text="Time window shown by the chart (defaults to last week).",
    )
    start_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={"type": "date"}),
        label="Start date",
    )
    end_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={"type": "date"}),
        label="End date",
    )

    def clean_range(self) -> RangeSelector:
        """Return the selected RangeSelector, defaulting to last week."""

        value = self.cleaned_data.get("range") or RangeSelector.last_week.value
        return RangeSelector(value)

    def clean(self) -> dict[str, object]:
        """Require both dates for a custom range.

        Start/end ordering is left to range resolution so an inverted range
        surfaces as `InvalidRangeError`.
        """

        cleaned = super().clean()
        if cleaned.get("range") is RangeSelector.custom:
            if cleaned.get("start_date") is None or cleaned.get("end_date") is None:
                raise forms.ValidationError("A custom range requires both a start date and an end date.")
        return cleaned

    def selector(self) -> RangeSelector:
        """Return the validated selector."""

        return self.cleaned_data["range"]

    def custom_range(self) -> CustomRange | None:
        """Return the validated custom bounds, or None for preset ranges."""

        if self.cleaned_data["range"] is not RangeSelector.custom:
            return None
        return CustomRange(start=self.cleaned_data["start_date"], end=self.cleaned_data["end_date"])
