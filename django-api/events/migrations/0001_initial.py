import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField()),
                (
                    "selection_kind",
                    models.CharField(
                        choices=[
                            ("builder", "Builder (single choice)"),
                            ("product", "Product (multiple choice)"),
                        ],
                        max_length=16,
                    ),
                ),
                ("selection_options", models.JSONField(default=list)),
                ("qr_link_target", models.URLField(max_length=500)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="events_even_created_2c9a1b_idx")
                ],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("phone_number", models.CharField(max_length=10)),
                ("name", models.CharField(max_length=255)),
                ("flat_no", models.CharField(max_length=50)),
                ("wing", models.CharField(max_length=50)),
                ("selection", models.JSONField()),
                ("attachment_ref", models.CharField(blank=True, max_length=1000, null=True)),
                ("registered_at", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registered_users",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["registered_at", "phone_number"],
                "indexes": [
                    models.Index(
                        fields=["event", "registered_at"], name="events_regi_event_i_7f3d2e_idx"
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "phone_number"),
                        name="unique_registration_per_event_phone",
                    )
                ],
            },
        ),
    ]
