"""App settings read from ``settings.ATTENDANCE``."""

from dataclasses import dataclass
from typing import Self

from django.conf import settings

DEFAULTS = {
    "TICKET_TYPES_TTL_MS": 60_000,
    "TICKETS_TTL_MS": 60_000,
    "STATUS_TTL_MS": 30_000,
    "CACHE_ENABLED": True,
    "SEND_CERTIFICATE_EMAILS": True,
    "CERTIFICATE_FROM_EMAIL": None,
    "EVENT_NAME": "Event",
    "CACHE_ALIAS": "attendance",
}


@dataclass(frozen=True)
class CacheTTLs:
    """Time-to-live of each cached snapshot, in milliseconds."""

    ticket_types_ms: float = DEFAULTS["TICKET_TYPES_TTL_MS"]
    tickets_ms: float = DEFAULTS["TICKETS_TTL_MS"]
    statuses_ms: float = DEFAULTS["STATUS_TTL_MS"]


@dataclass(frozen=True)
class AttendanceSettings:
    ttls: CacheTTLs
    cache_enabled: bool
    send_certificate_emails: bool
    certificate_from_email: str | None
    event_name: str
    cache_alias: str = DEFAULTS["CACHE_ALIAS"]

    @classmethod
    def from_django(cls) -> Self:
        values = {**DEFAULTS, **getattr(settings, "ATTENDANCE", {})}
        return cls(
            ttls=CacheTTLs(
                ticket_types_ms=values["TICKET_TYPES_TTL_MS"],
                tickets_ms=values["TICKETS_TTL_MS"],
                statuses_ms=values["STATUS_TTL_MS"],
            ),
            cache_enabled=values["CACHE_ENABLED"],
            send_certificate_emails=values["SEND_CERTIFICATE_EMAILS"],
            certificate_from_email=values["CERTIFICATE_FROM_EMAIL"],
            event_name=values["EVENT_NAME"],
            cache_alias=values["CACHE_ALIAS"],
        )
