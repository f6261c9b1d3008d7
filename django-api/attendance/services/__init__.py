"""Service wiring for the Django process."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from django.apps import apps

from attendance.conf import AttendanceSettings
from attendance.services.attendance_service import AttendanceService, CheckOutResult
from attendance.services.cache import ReadThroughCache
from attendance.services.certificate_service import CertificateIssuanceController
from attendance.services.notifications import (
    CertificateNotifier,
    EmailCertificateNotifier,
    NullCertificateNotifier,
)
from attendance.services.registration_service import RegistrationService
from attendance.services.status_resolver import ParticipantStatusResolver
from attendance.stores.interfaces import AttendanceStore

__all__ = [
    "AttendanceService",
    "CheckOutResult",
    "RegistrationService",
    "Services",
    "build_services",
    "get_services",
]


@dataclass(frozen=True)
class Services:
    attendance: AttendanceService
    registration: RegistrationService


def build_services(
    store: AttendanceStore,
    cache: ReadThroughCache,
    settings: AttendanceSettings,
    notifier: CertificateNotifier | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Services:
    clock = clock or (lambda: datetime.now(timezone.utc))
    if notifier is None:
        notifier = (
            EmailCertificateNotifier(settings.event_name, settings.certificate_from_email)
            if settings.send_certificate_emails
            else NullCertificateNotifier()
        )
    resolver = ParticipantStatusResolver(store, cache, settings.ttls)
    certificates = CertificateIssuanceController(store, resolver, cache, notifier, clock)
    return Services(
        attendance=AttendanceService(store, cache, resolver, certificates, clock),
        registration=RegistrationService(store, cache, resolver),
    )


def get_services() -> Services:
    """Services backed by the ORM store and the process-wide cache."""
    from attendance.stores.django_store import DjangoAttendanceStore

    cache = apps.get_app_config("attendance").cache
    return build_services(DjangoAttendanceStore(), cache, AttendanceSettings.from_django())
