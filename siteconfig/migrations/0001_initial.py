import datetime
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="UnitConfiguration",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("unit_name", models.CharField(max_length=200)),
                (
                    "unit_type",
                    models.CharField(
                        choices=[
                            ("rainbow", "Rainbow"),
                            ("brownie", "Brownie"),
                            ("guide", "Guide"),
                            ("ranger", "Ranger"),
                        ],
                        default="brownie",
                        help_text="The section this unit runs (e.g. Brownies)",
                        max_length=20,
                    ),
                ),
                (
                    "meeting_day_of_week",
                    models.PositiveSmallIntegerField(
                        choices=[
                            (0, "Monday"),
                            (1, "Tuesday"),
                            (2, "Wednesday"),
                            (3, "Thursday"),
                            (4, "Friday"),
                            (5, "Saturday"),
                            (6, "Sunday"),
                        ],
                        default=0,
                    ),
                ),
                (
                    "default_meeting_start_time",
                    models.TimeField(default=datetime.time(18, 30)),
                ),
                (
                    "default_meeting_end_time",
                    models.TimeField(default=datetime.time(19, 45)),
                ),
                ("default_location_name", models.CharField(max_length=200)),
                ("default_location_address", models.TextField(blank=True)),
                (
                    "default_subs_amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("20.00"),
                        help_text="Subscription amount suggested for new terms",
                        max_digits=7,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(
                                Decimal("10000.00")
                            ),
                        ],
                    ),
                ),
                (
                    "payment_term_days",
                    models.PositiveSmallIntegerField(
                        default=14,
                        help_text="Days allowed before a subscription payment is overdue",
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(365),
                        ],
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Unit Configuration",
                "verbose_name_plural": "Unit Configuration",
            },
        ),
    ]
