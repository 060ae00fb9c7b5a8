from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("members", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DataRemovalLog",
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
                ("membership_number", models.CharField(max_length=50)),
                ("person_name", models.CharField(max_length=200)),
                ("removal_date", models.DateTimeField(auto_now_add=True)),
                ("removed_by", models.CharField(max_length=150)),
                ("data_exported", models.BooleanField(default=False)),
                ("notes", models.TextField(blank=True)),
            ],
            options={
                "ordering": ["-removal_date"],
            },
        ),
    ]
