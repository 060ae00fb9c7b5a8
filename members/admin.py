from django.contrib import admin, messages
from django.contrib.admin import SimpleListFilter
from django.http import HttpResponse
from import_export import resources
from import_export.admin import ImportExportModelAdmin

from utils.admin_helpers import AdminHelperMixin

from .constants.membership import STATUS_ALIASES
from .models import DataRemovalLog, EmergencyContact, Person
from .services import PersonService


class ActiveStatusFilter(SimpleListFilter):
    title = "Active status"
    parameter_name = "status"

    def lookups(self, request, model_admin):
        return [(alias, alias.capitalize()) for alias in STATUS_ALIASES]

    def queryset(self, request, queryset):
        if self.value() in STATUS_ALIASES:
            return queryset.filter(is_active=STATUS_ALIASES[self.value()])
        return queryset


#########################
# PersonResource Class

# CSV/XLSX import and export of the register through django-import-export.
# Rows are matched on membership_number so re-importing a roster updates
# people in place instead of duplicating them. Emergency contacts are not
# part of the flat file.


class PersonResource(resources.ModelResource):
    class Meta:
        model = Person
        import_id_fields = ("membership_number",)
        skip_unchanged = True
        fields = (
            "membership_number",
            "full_name",
            "date_of_birth",
            "person_type",
            "section",
            "email",
            "phone",
            "date_joined",
            "date_left",
            "is_active",
            "photo_permission",
        )


class EmergencyContactInline(admin.TabularInline):
    model = EmergencyContact
    extra = 0
    fields = (
        "contact_name",
        "relationship",
        "primary_phone",
        "secondary_phone",
        "email",
        "sort_order",
    )
    ordering = ("sort_order",)


#########################
# PersonAdmin Class

# list_display / list_filter: register overview by type, section and status
# inlines: emergency contacts, renumbered 0..n-1 after every save
# actions:
# - mark_inactive soft-deletes instead of deleting rows
# - export_member_data downloads everything held about the selection as JSON
# - remove_member_data erases personal data and writes a DataRemovalLog


@admin.register(Person)
class PersonAdmin(AdminHelperMixin, ImportExportModelAdmin):
    resource_classes = [PersonResource]
    inlines = [EmergencyContactInline]
    actions = ["mark_inactive", "export_member_data", "remove_member_data"]
    readonly_fields = ("is_data_removed",)

    list_display = (
        "membership_number",
        "full_name",
        "person_type",
        "section",
        "date_joined",
        "is_active",
    )
    list_filter = ("person_type", "section", ActiveStatusFilter, "photo_permission")
    search_fields = ("membership_number", "full_name", "email")
    ordering = ("full_name", "membership_number")

    fieldsets = (
        (
            "Membership",
            {
                "fields": (
                    "membership_number",
                    "person_type",
                    "section",
                    "date_joined",
                    "date_left",
                    "is_active",
                    "is_data_removed",
                )
            },
        ),
        ("Personal details", {"fields": ("full_name", "date_of_birth", "email", "phone")}),
        (
            "Care information",
            {"fields": ("allergies", "disabilities", "photo_permission", "notes")},
        ),
    )

    admin_helper_message = (
        "<b>People:</b> the unit register. Leaving members should be marked "
        "inactive rather than deleted; deleting a person also deletes their "
        "emergency contacts."
    )

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        PersonService().renumber_emergency_contacts(form.instance)

    @admin.action(description="Mark selected people inactive")
    def mark_inactive(self, request, queryset):
        deactivated = 0
        service = PersonService()
        for person in queryset.filter(is_active=True):
            if service.deactivate(person.pk).is_ok:
                deactivated += 1
        self.message_user(request, f"Marked {deactivated} people as inactive.")

    @admin.action(description="Export personal data of selected people (JSON)")
    def export_member_data(self, request, queryset):
        service = PersonService()
        exports = []
        for person in queryset:
            result = service.export_member_data(person.pk)
            if not result.is_ok:
                self.message_user(request, result.message, level=messages.ERROR)
                return None
            exports.append(result.value)

        response = HttpResponse(
            "[\n" + ",\n".join(exports) + "\n]", content_type="application/json"
        )
        response["Content-Disposition"] = "attachment; filename=member_data_export.json"
        return response

    @admin.action(description="Remove personal data of selected people")
    def remove_member_data(self, request, queryset):
        service = PersonService()
        removed = 0
        for person in queryset:
            result = service.remove_member_data(person.pk, removed_by=request.user.get_username())
            if result.is_ok:
                removed += 1
            else:
                self.message_user(
                    request, f"{person}: {result.message}", level=messages.WARNING
                )
        self.message_user(request, f"Removed personal data for {removed} people.")


@admin.register(DataRemovalLog)
class DataRemovalLogAdmin(AdminHelperMixin, admin.ModelAdmin):
    list_display = ("membership_number", "person_name", "removal_date", "removed_by", "data_exported")
    search_fields = ("membership_number", "person_name")
    admin_helper_message = "Data removal log: a permanent record of every personal data erasure."

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
