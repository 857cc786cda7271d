from events.stores.django_store import DjangoEventStore, DjangoRegistrationStore
from events.stores.in_memory import InMemoryEventStore, InMemoryRegistrationStore
from events.stores.interfaces import EventStore, RegistrationStore

__all__ = [
    "EventStore",
    "RegistrationStore",
    "DjangoEventStore",
    "DjangoRegistrationStore",
    "InMemoryEventStore",
    "InMemoryRegistrationStore",
]
