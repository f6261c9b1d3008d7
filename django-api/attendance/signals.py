"""Django signals for cache invalidation.

Services invalidate the cache themselves; these handlers cover writes made
directly through the ORM, such as the admin site.
"""

from django.apps import apps
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from attendance.models import AttendanceEvent, Certificate, Ticket, TicketType
from attendance.services.cache import (
    PARTICIPANT_STATUSES_KEY,
    TICKET_TYPES_KEY,
    TICKETS_KEY,
)


def _invalidate(*keys: str) -> None:
    cache = apps.get_app_config("attendance").cache
    for key in keys:
        cache.invalidate(key)


@receiver([post_save, post_delete], sender=TicketType)
def invalidate_ticket_type_cache(sender, instance, **kwargs):
    """Invalidate caches when a ticket type is saved or deleted."""
    _invalidate(TICKET_TYPES_KEY, PARTICIPANT_STATUSES_KEY)


@receiver([post_save, post_delete], sender=Ticket)
def invalidate_ticket_cache(sender, instance, **kwargs):
    """Invalidate caches when a ticket is saved or deleted."""
    _invalidate(TICKETS_KEY, PARTICIPANT_STATUSES_KEY)


@receiver([post_save, post_delete], sender=AttendanceEvent)
def invalidate_attendance_cache(sender, instance, **kwargs):
    """Invalidate the status snapshot when attendance changes."""
    _invalidate(PARTICIPANT_STATUSES_KEY)


@receiver([post_save, post_delete], sender=Certificate)
def invalidate_certificate_cache(sender, instance, **kwargs):
    """Invalidate the status snapshot when a certificate changes."""
    _invalidate(PARTICIPANT_STATUSES_KEY)
