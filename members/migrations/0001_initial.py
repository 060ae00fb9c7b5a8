import django.db.models.deletion
import django.utils.timezone
import tinymce.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Person",
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
                ("membership_number", models.CharField(max_length=50, unique=True)),
                ("full_name", models.CharField(blank=True, max_length=200)),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                (
                    "person_type",
                    models.CharField(
                        choices=[("leader", "Leader"), ("girl", "Girl")],
                        max_length=10,
                    ),
                ),
                (
                    "section",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("rainbow", "Rainbow"),
                            ("brownie", "Brownie"),
                            ("guide", "Guide"),
                            ("ranger", "Ranger"),
                        ],
                        help_text="Required for girls, left blank for leaders.",
                        max_length=10,
                    ),
                ),
                ("email", models.EmailField(blank=True, max_length=200)),
                ("phone", models.CharField(blank=True, max_length=50)),
                (
                    "date_joined",
                    models.DateField(default=django.utils.timezone.localdate),
                ),
                ("date_left", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("is_data_removed", models.BooleanField(default=False)),
                ("allergies", models.TextField(blank=True)),
                ("disabilities", models.TextField(blank=True)),
                ("notes", tinymce.models.HTMLField(blank=True)),
                (
                    "photo_permission",
                    models.CharField(
                        choices=[
                            ("none", "No photos"),
                            ("unit_only", "Unit use only"),
                            ("full", "Full permission"),
                        ],
                        default="none",
                        max_length=10,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Person",
                "verbose_name_plural": "People",
                "ordering": ["full_name", "membership_number"],
                "indexes": [
                    models.Index(
                        fields=["is_active", "person_type"],
                        name="person_active_type_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="EmergencyContact",
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
                ("contact_name", models.CharField(max_length=200)),
                ("relationship", models.CharField(max_length=100)),
                ("primary_phone", models.CharField(max_length=50)),
                ("secondary_phone", models.CharField(blank=True, max_length=50)),
                ("email", models.EmailField(blank=True, max_length=200)),
                ("notes", models.TextField(blank=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "person",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="emergency_contacts",
                        to="members.person",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
    ]
