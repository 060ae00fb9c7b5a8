import datetime
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from members.constants.membership import Section


class Weekday(models.IntegerChoices):
    """Python's date.weekday() numbering, Monday first."""

    MONDAY = 0, "Monday"
    TUESDAY = 1, "Tuesday"
    WEDNESDAY = 2, "Wednesday"
    THURSDAY = 3, "Thursday"
    FRIDAY = 4, "Friday"
    SATURDAY = 5, "Saturday"
    SUNDAY = 6, "Sunday"


# Values written by ConfigurationService.ensure_default_configuration()
# the first time the application starts against an empty database.
DEFAULT_CONFIGURATION = {
    "unit_name": "My Unit",
    "unit_type": Section.BROWNIE,
    "meeting_day_of_week": Weekday.MONDAY,
    "default_meeting_start_time": datetime.time(18, 30),
    "default_meeting_end_time": datetime.time(19, 45),
    "default_location_name": "Village Hall",
    "default_location_address": "",
    "default_subs_amount": Decimal("20.00"),
    "payment_term_days": 14,
}


#########################
# UnitConfiguration Model

# Unit-wide settings. Exactly one row exists once the application has
# started (see siteconfig.apps and ConfigurationService); clean() refuses
# a second row and the admin hides "add" once the row exists.


class UnitConfiguration(models.Model):
    unit_name = models.CharField(max_length=200)
    unit_type = models.CharField(
        max_length=20,
        choices=Section.choices,
        default=Section.BROWNIE,
        help_text="The section this unit runs (e.g. Brownies)",
    )

    # Regular meeting defaults
    meeting_day_of_week = models.PositiveSmallIntegerField(
        choices=Weekday.choices, default=Weekday.MONDAY
    )
    default_meeting_start_time = models.TimeField(default=datetime.time(18, 30))
    default_meeting_end_time = models.TimeField(default=datetime.time(19, 45))
    default_location_name = models.CharField(max_length=200)
    default_location_address = models.TextField(blank=True)

    # Subscriptions
    default_subs_amount = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("20.00"),
        validators=[
            MinValueValidator(Decimal("0")),
            MaxValueValidator(Decimal("10000.00")),
        ],
        help_text="Subscription amount suggested for new terms",
    )
    payment_term_days = models.PositiveSmallIntegerField(
        default=14,
        validators=[MinValueValidator(1), MaxValueValidator(365)],
        help_text="Days allowed before a subscription payment is overdue",
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Unit Configuration"
        verbose_name_plural = "Unit Configuration"

    def clean(self):
        if UnitConfiguration.objects.exclude(id=self.id).exists():
            raise ValidationError("Only one UnitConfiguration instance allowed.")

        if (
            self.default_meeting_start_time
            and self.default_meeting_end_time
            and self.default_meeting_end_time <= self.default_meeting_start_time
        ):
            raise ValidationError(
                {"default_meeting_end_time": "Meeting end time must be after the start time."}
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Unit Configuration for {self.unit_name}"
