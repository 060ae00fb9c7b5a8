from django.contrib import admin

from utils.admin_helpers import AdminHelperMixin

from .models import UnitConfiguration


@admin.register(UnitConfiguration)
class UnitConfigurationAdmin(AdminHelperMixin, admin.ModelAdmin):
    admin_helper_message = (
        "Unit configuration is a single record created on first start. "
        "Edit it here or from the Unit Settings page."
    )
    list_display = ("unit_name", "unit_type", "meeting_day_of_week", "updated_at")
    readonly_fields = ("updated_at",)
    fieldsets = (
        ("Unit", {"fields": ("unit_name", "unit_type")}),
        (
            "Meetings",
            {
                "fields": (
                    "meeting_day_of_week",
                    "default_meeting_start_time",
                    "default_meeting_end_time",
                    "default_location_name",
                    "default_location_address",
                )
            },
        ),
        ("Subscriptions", {"fields": ("default_subs_amount", "payment_term_days")}),
        ("History", {"fields": ("updated_at",), "classes": ("collapse",)}),
    )

    def has_add_permission(self, request):
        # Add stays available only until the singleton row exists
        return not UnitConfiguration.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
