from django import forms

from .models import EmergencyContact

#########################
# EmergencyContactForm Class

# Quick-add form on the member detail page. sort_order is not a field:
# new contacts are always appended after the existing ones.


class EmergencyContactForm(forms.ModelForm):
    class Meta:
        model = EmergencyContact
        fields = [
            "contact_name",
            "relationship",
            "primary_phone",
            "secondary_phone",
            "email",
            "notes",
        ]
        widgets = {
            "contact_name": forms.TextInput(attrs={"class": "form-control"}),
            "relationship": forms.TextInput(
                attrs={"class": "form-control", "placeholder": "e.g. Mother"}
            ),
            "primary_phone": forms.TextInput(attrs={"class": "form-control"}),
            "secondary_phone": forms.TextInput(attrs={"class": "form-control"}),
            "email": forms.EmailInput(attrs={"class": "form-control"}),
            "notes": forms.Textarea(attrs={"class": "form-control", "rows": 2}),
        }
