"""Django signals for cache invalidation and failed notifications."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from events.cache import event_detail_key, registration_count_key
from events.models import Event, Registration

# Sent with registration=, event=, error= once every delivery attempt failed.
notification_failed = Signal()


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    cache.delete(event_detail_key(str(instance.pk)))


@receiver([post_save, post_delete], sender=Registration)
def invalidate_registration_count_cache(sender, instance, **kwargs):
    """Invalidate the registration count when a registration is saved or deleted."""
    cache.delete(registration_count_key(str(instance.event_id)))
