"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.utils import timezone


class Event(models.Model):
    """Persistence model for events."""

    class SelectionKind(models.TextChoices):
        BUILDER = "builder", "Builder (single choice)"
        PRODUCT = "product", "Product (multiple choice)"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    selection_kind = models.CharField(max_length=16, choices=SelectionKind.choices)
    selection_options = models.JSONField(default=list)
    qr_link_target = models.URLField(max_length=500)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="events_even_created_2c9a1b_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Registration(models.Model):
    """Persistence model for a registered user, keyed by (event, phone_number)."""

    event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="registered_users"
    )
    phone_number = models.CharField(max_length=10)
    name = models.CharField(max_length=255)
    flat_no = models.CharField(max_length=50)
    wing = models.CharField(max_length=50)
    selection = models.JSONField()
    attachment_ref = models.CharField(max_length=1000, blank=True, null=True)
    registered_at = models.DateTimeField()

    class Meta:
        ordering = ["registered_at", "phone_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "phone_number"],
                name="unique_registration_per_event_phone",
            ),
        ]
        indexes = [
            models.Index(fields=["event", "registered_at"], name="events_regi_event_i_7f3d2e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.phone_number}"
