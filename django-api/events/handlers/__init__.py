from events.handlers.views import EventDetailView, EventListView, ExportView, RegistrationListView

__all__ = ["EventListView", "EventDetailView", "RegistrationListView", "ExportView"]
