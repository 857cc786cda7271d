"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import csv

from django.core.cache import cache
from django.http import HttpResponse
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.cache import event_detail_key, registration_count_key, registration_count_timeout
from events.domain import Accepted
from events.domain.errors import DomainError, ErrorCode
from events.handlers.serializers import (
    EventCreateSerializer,
    EventSerializer,
    RegistrationRequestSerializer,
    RegistrationSerializer,
)
from events.services import get_event_service, get_export_service, get_registration_service

ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_NOT_ACTIVE: status.HTTP_409_CONFLICT,
    ErrorCode.FIELD_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PHONE_NUMBER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SELECTION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_WINDOW: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SCHEMA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMPTY_RESULT: status.HTTP_204_NO_CONTENT,
    ErrorCode.STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message, **error.details}
    return Response({"error": body}, status=ERROR_STATUS[error.code])


def invalid_request_response(errors: dict) -> Response:
    return Response(
        {"error": {"code": "INVALID_REQUEST", "message": "Malformed request", "fields": errors}},
        status=status.HTTP_400_BAD_REQUEST,
    )


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        try:
            events = get_event_service().list_events()
        except DomainError as exc:
            return error_response(exc)
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = EventCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)
        data = serializer.validated_data
        try:
            event = get_event_service().create(
                name=data["name"],
                start_time=data["startTime"],
                end_time=data["endTime"],
                schema_kind=data["selectionSchema"]["kind"],
                options=data["selectionSchema"]["options"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        service = get_event_service()
        try:
            event = service.get_event(event_id)
            count = cache.get_or_set(
                registration_count_key(event_id),
                lambda: get_registration_service().registration_count(event_id),
                registration_count_timeout(),
            )
        except DomainError as exc:
            return error_response(exc)

        data = cache.get(event_detail_key(event_id))
        if data is None:
            data = dict(EventSerializer(event).data)
            cache.set(event_detail_key(event_id), data)
        return Response(
            {
                **data,
                "windowState": service.window_state(event).value,
                "registrationCount": count,
            }
        )


class RegistrationListView(APIView):
    """Handler for GET/POST /api/events/{event_id}/registrations"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            registrations = get_registration_service().list_registrations(event_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(RegistrationSerializer(registrations, many=True).data)

    def post(self, request: Request, event_id: str) -> Response:
        serializer = RegistrationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)
        data = serializer.validated_data
        try:
            outcome = get_registration_service().register(
                event_id=event_id,
                phone_number=data["phoneNumber"],
                name=data["name"],
                flat_no=data["flatNo"],
                wing=data["wing"],
                selection=data["selection"],
                attachment_ref=data["attachmentRef"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(
            {
                "status": "accepted" if isinstance(outcome, Accepted) else "already_registered",
                "registration": RegistrationSerializer(outcome.registration).data,
            }
        )


class ExportView(APIView):
    """Handler for GET /api/events/{event_id}/export"""

    def get(self, request: Request, event_id: str) -> HttpResponse | Response:
        try:
            snapshot = get_export_service().export(event_id)
        except DomainError as exc:
            if exc.code is ErrorCode.EMPTY_RESULT:
                return Response(status=status.HTTP_204_NO_CONTENT)
            return error_response(exc)

        response = HttpResponse(content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{snapshot.filename}.csv"'
        writer = csv.writer(response)
        writer.writerow(snapshot.columns)
        for row in snapshot.rows:
            writer.writerow(row.as_tuple())
        return response
