"""Serializers for parsing requests and rendering domain models.

Input serializers only check request shape; business rules are enforced by
the services so that their errors come back with domain error codes.
"""

from rest_framework import serializers


class SelectionSchemaInputSerializer(serializers.Serializer):
    kind = serializers.CharField()
    options = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=True)


class EventCreateSerializer(serializers.Serializer):
    """Request body for POST /api/events."""

    name = serializers.CharField(allow_blank=True, default="")
    startTime = serializers.DateTimeField()
    endTime = serializers.DateTimeField()
    selectionSchema = SelectionSchemaInputSerializer()


class RegistrationRequestSerializer(serializers.Serializer):
    """Request body for POST /api/events/{event_id}/registrations."""

    name = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    phoneNumber = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    flatNo = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    wing = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    selection = serializers.JSONField(default=None)
    attachmentRef = serializers.CharField(allow_blank=True, allow_null=True, default=None)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    startTime = serializers.DateTimeField(source="start_time")
    endTime = serializers.DateTimeField(source="end_time")
    selectionSchema = serializers.SerializerMethodField()
    qrLinkTarget = serializers.CharField(source="qr_link_target")
    createdAt = serializers.DateTimeField(source="created_at")

    def get_selectionSchema(self, obj) -> dict:
        return obj.selection_schema.to_dict()


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    phoneNumber = serializers.CharField(source="phone_number")
    name = serializers.CharField()
    flatNo = serializers.CharField(source="flat_no")
    wing = serializers.CharField()
    selection = serializers.SerializerMethodField()
    attachmentRef = serializers.CharField(source="attachment_ref", allow_null=True)
    registeredAt = serializers.DateTimeField(source="registered_at")

    def get_selection(self, obj) -> str | list[str]:
        return obj.selection if isinstance(obj.selection, str) else list(obj.selection)
