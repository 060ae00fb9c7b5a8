from django import forms
from django.contrib import admin
from django.utils import timezone

from utils.admin_helpers import AdminHelperMixin

from .models import Term, TermStatus
from .services import TERM_OVERLAPS, TermService


class TermAdminForm(forms.ModelForm):
    class Meta:
        model = Term
        fields = "__all__"

    def clean(self):
        cleaned_data = super().clean()
        start, end = cleaned_data.get("start_date"), cleaned_data.get("end_date")
        if start and end and end > start:
            candidate = Term(start_date=start, end_date=end)
            if not TermService().validate_no_overlap(candidate, exclude_id=self.instance.pk):
                raise forms.ValidationError(TERM_OVERLAPS)
        return cleaned_data


class TermStatusFilter(admin.SimpleListFilter):
    title = "Status"
    parameter_name = "status"

    def lookups(self, request, model_admin):
        return TermStatus.choices

    def queryset(self, request, queryset):
        today = timezone.localdate()
        if self.value() == TermStatus.CURRENT:
            return queryset.filter(start_date__lte=today, end_date__gte=today)
        if self.value() == TermStatus.FUTURE:
            return queryset.filter(start_date__gt=today)
        if self.value() == TermStatus.PAST:
            return queryset.filter(end_date__lt=today)
        return queryset


@admin.register(Term)
class TermAdmin(AdminHelperMixin, admin.ModelAdmin):
    form = TermAdminForm
    admin_helper_message = "Terms must not overlap. Deleting a term is permanent."
    list_display = ("name", "start_date", "end_date", "subs_amount", "status")
    list_filter = (TermStatusFilter,)
    search_fields = ("name",)
    date_hierarchy = "start_date"

    @admin.display(description="Status")
    def status(self, obj):
        return obj.status_on(timezone.localdate()).label
