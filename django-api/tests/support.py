"""Test doubles and builders shared across test modules."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from attendance.domain import AttendanceEvent, AttendanceKind, TicketId
from attendance.services.notifications import CertificateNotifier

START = datetime(2024, 5, 4, 9, 0, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return START.replace(hour=hour, minute=minute, second=second)


def event(kind: AttendanceKind, timestamp: datetime, ticket_id: TicketId | None = None):
    return AttendanceEvent(
        id=uuid4(),
        ticket_id=ticket_id or TicketId(uuid4()),
        timestamp=timestamp,
        kind=kind,
        recorded_at=START,
    )


def check_in(timestamp: datetime, ticket_id: TicketId | None = None) -> AttendanceEvent:
    return event(AttendanceKind.CHECK_IN, timestamp, ticket_id)


def check_out(timestamp: datetime, ticket_id: TicketId | None = None) -> AttendanceEvent:
    return event(AttendanceKind.CHECK_OUT, timestamp, ticket_id)


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class FakeMillis:
    """Millisecond clock for cache TTL tests."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class RecordingNotifier(CertificateNotifier):
    def __init__(self) -> None:
        self.issued = []

    def certificate_issued(self, status, certificate) -> None:
        self.issued.append((status, certificate))


class FailingNotifier(CertificateNotifier):
    def certificate_issued(self, status, certificate) -> None:
        raise ConnectionError("mail server unreachable")
