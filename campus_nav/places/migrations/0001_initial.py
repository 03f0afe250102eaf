from django.db import migrations, models

import campus_nav.places.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Place",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("eateries", "Eateries"),
                            ("recreation", "Recreation"),
                            ("educational", "Educational"),
                            ("administration", "Administration"),
                            ("staff_quarters", "Staff Quarters"),
                            ("hostel", "Hostel"),
                            ("library", "Library"),
                            ("other", "Other"),
                        ],
                        db_index=True,
                        default="other",
                        max_length=20,
                    ),
                ),
                ("latitude", models.FloatField()),
                ("longitude", models.FloatField()),
                (
                    "opening_hours",
                    models.JSONField(blank=True, default=campus_nav.places.models.default_opening_hours),
                ),
                (
                    "contact_info",
                    models.JSONField(blank=True, default=campus_nav.places.models.default_contact_info),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["category", "is_active"], name="place_category_active_idx")],
            },
        ),
    ]
