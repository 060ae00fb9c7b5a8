from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from tinymce.models import HTMLField

from members.constants.membership import PersonType, PhotoPermission, Section

#########################
# Person Model

# A member of the unit: either a Leader or a Girl in one Section.

# Fields:
# - membership_number: unique organisation membership number
# - full_name / date_of_birth: personal details (blanked when data is removed)
# - person_type: Leader or Girl
# - section: Rainbow, Brownie, Guide or Ranger; girls only
# - email / phone: leader contact details
# - date_joined / date_left: membership period
# - is_active: False once the member has left (soft delete)
# - is_data_removed: personal data has been erased on request
# - allergies / disabilities / notes: care information
# - photo_permission: consent level for photographs

# Related:
# - emergency_contacts: EmergencyContact rows ordered by sort_order


class Person(models.Model):
    membership_number = models.CharField(max_length=50, unique=True)
    full_name = models.CharField(max_length=200, blank=True)
    date_of_birth = models.DateField(blank=True, null=True)

    person_type = models.CharField(max_length=10, choices=PersonType.choices)
    section = models.CharField(
        max_length=10,
        choices=Section.choices,
        blank=True,
        help_text="Required for girls, left blank for leaders.",
    )

    # Leader contact details
    email = models.EmailField(max_length=200, blank=True)
    phone = models.CharField(max_length=50, blank=True)

    date_joined = models.DateField(default=timezone.localdate)
    date_left = models.DateField(blank=True, null=True)
    is_active = models.BooleanField(default=True)
    is_data_removed = models.BooleanField(default=False)

    allergies = models.TextField(blank=True)
    disabilities = models.TextField(blank=True)
    notes = HTMLField(blank=True)
    photo_permission = models.CharField(
        max_length=10,
        choices=PhotoPermission.choices,
        default=PhotoPermission.NONE,
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Person"
        verbose_name_plural = "People"
        ordering = ["full_name", "membership_number"]
        indexes = [
            models.Index(fields=["is_active", "person_type"], name="person_active_type_idx"),
        ]

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        return self.full_name or f"Member {self.membership_number}"

    @property
    def is_leader(self):
        return self.person_type == PersonType.LEADER

    def clean(self):
        if self.person_type == PersonType.GIRL and not self.section:
            raise ValidationError({"section": "Girls must be assigned to a section."})
        if self.person_type == PersonType.LEADER and self.section:
            raise ValidationError({"section": "Leaders are not assigned to a section."})
        if self.date_left and self.date_joined and self.date_left < self.date_joined:
            raise ValidationError({"date_left": "Date left cannot be before date joined."})


#########################
# EmergencyContact Model

# Someone to call about a Person. A person's contacts are numbered by
# sort_order 0..n-1 with no gaps; members.utils.contacts keeps that true
# when contacts are added or removed.


class EmergencyContact(models.Model):
    person = models.ForeignKey(
        Person, on_delete=models.CASCADE, related_name="emergency_contacts"
    )
    contact_name = models.CharField(max_length=200)
    relationship = models.CharField(max_length=100)
    primary_phone = models.CharField(max_length=50)
    secondary_phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self):
        return f"{self.contact_name} ({self.relationship})"


#########################
# DataRemovalLog Model

# Audit record written when a person's personal data is erased. Holds the
# membership number and the name as it was before removal.


class DataRemovalLog(models.Model):
    membership_number = models.CharField(max_length=50)
    person_name = models.CharField(max_length=200)
    removal_date = models.DateTimeField(auto_now_add=True)
    removed_by = models.CharField(max_length=150)
    data_exported = models.BooleanField(default=False)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-removal_date"]

    def __str__(self):
        return f"{self.membership_number} removed {self.removal_date:%Y-%m-%d}"
