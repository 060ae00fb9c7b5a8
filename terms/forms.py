from django import forms

from .models import Term


class TermForm(forms.ModelForm):
    """Add/edit form bound to an unsaved copy of a Term."""

    class Meta:
        model = Term
        fields = ["name", "start_date", "end_date", "subs_amount"]
        labels = {"subs_amount": "Subscription amount"}
        widgets = {
            "name": forms.TextInput(
                attrs={"class": "form-control", "placeholder": "e.g. Spring 2025"}
            ),
            "start_date": forms.DateInput(
                attrs={"class": "form-control", "type": "date"}, format="%Y-%m-%d"
            ),
            "end_date": forms.DateInput(
                attrs={"class": "form-control", "type": "date"}, format="%Y-%m-%d"
            ),
            "subs_amount": forms.NumberInput(
                attrs={"class": "form-control", "step": "0.01", "min": "0"}
            ),
        }
