from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MAX_SUBS_AMOUNT = Decimal("10000.00")
MAX_NAME_LENGTH = 100


class TermStatus(models.TextChoices):
    """Where a term sits relative to a given day."""

    CURRENT = "current", "Current"
    FUTURE = "future", "Future"
    PAST = "past", "Past"


#########################
# Term Model

# One operating period of the unit (e.g. a school term) and the
# subscription fee charged for it.

# Fields:
# - name: display name, e.g. "Spring 2025"
# - start_date / end_date: inclusive date range, end must be after start
# - subs_amount: subscription fee for the term, 0 to 10,000

# Current/future/past is never stored on the row. status_on() and the
# TermService queries compute it against the day they are given.


class Term(models.Model):
    name = models.CharField(max_length=MAX_NAME_LENGTH)
    start_date = models.DateField()
    end_date = models.DateField()
    subs_amount = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("20.00"),
        validators=[
            MinValueValidator(Decimal("0")),
            MaxValueValidator(MAX_SUBS_AMOUNT),
        ],
        help_text="Subscription amount charged for this term.",
    )

    class Meta:
        ordering = ["-start_date"]
        indexes = [
            models.Index(fields=["start_date"], name="term_start_date_idx"),
            models.Index(fields=["end_date"], name="term_end_date_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.start_date:%d %b %Y} - {self.end_date:%d %b %Y})"

    def validation_errors(self):
        """Return the list of rule violations for this term, empty when valid."""
        errors = []
        if not (self.name or "").strip():
            errors.append("Term name is required.")
        elif len(self.name.strip()) > MAX_NAME_LENGTH:
            errors.append(f"Term name cannot exceed {MAX_NAME_LENGTH} characters.")
        if self.start_date is None or self.end_date is None:
            errors.append("Start and end dates are required.")
        elif self.end_date <= self.start_date:
            errors.append("End date must be after start date.")
        if self.subs_amount is None:
            errors.append("Subscription amount is required.")
        elif self.subs_amount < 0:
            errors.append("Subscription amount cannot be negative.")
        elif self.subs_amount > MAX_SUBS_AMOUNT:
            errors.append("Subscription amount cannot exceed 10,000.")
        return errors

    def clean(self):
        # Field-level rules are covered by the field definitions.
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError({"end_date": "End date must be after start date."})

    def status_on(self, day):
        if day < self.start_date:
            return TermStatus.FUTURE
        if day > self.end_date:
            return TermStatus.PAST
        return TermStatus.CURRENT
