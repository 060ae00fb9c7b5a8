from django import forms

from .models import UnitConfiguration


class UnitConfigurationForm(forms.ModelForm):
    """Edit form for the unit settings page."""

    class Meta:
        model = UnitConfiguration
        fields = [
            "unit_name",
            "unit_type",
            "meeting_day_of_week",
            "default_meeting_start_time",
            "default_meeting_end_time",
            "default_location_name",
            "default_location_address",
            "default_subs_amount",
            "payment_term_days",
        ]
        widgets = {
            "unit_name": forms.TextInput(attrs={"class": "form-control"}),
            "unit_type": forms.Select(attrs={"class": "form-select"}),
            "meeting_day_of_week": forms.Select(attrs={"class": "form-select"}),
            "default_meeting_start_time": forms.TimeInput(
                attrs={"class": "form-control", "type": "time"}, format="%H:%M"
            ),
            "default_meeting_end_time": forms.TimeInput(
                attrs={"class": "form-control", "type": "time"}, format="%H:%M"
            ),
            "default_location_name": forms.TextInput(attrs={"class": "form-control"}),
            "default_location_address": forms.Textarea(
                attrs={"class": "form-control", "rows": 3}
            ),
            "default_subs_amount": forms.NumberInput(
                attrs={"class": "form-control", "step": "0.01", "min": "0"}
            ),
            "payment_term_days": forms.NumberInput(
                attrs={"class": "form-control", "min": "1", "max": "365"}
            ),
        }
