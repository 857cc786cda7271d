from django.urls import path

from events.handlers import EventDetailView, EventListView, ExportView, RegistrationListView

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/registrations",
        RegistrationListView.as_view(),
        name="registration-list",
    ),
    path("events/<str:event_id>/export", ExportView.as_view(), name="event-export"),
]
