"""In-memory implementation of the AttendanceStore.

Keeps records in insertion-ordered dicts. Used by the test-suite and by
callers embedding the engine without a database.
"""

import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from uuid import UUID, uuid4

from attendance.domain import (
    AttendanceEvent,
    AttendanceKind,
    Certificate,
    Hours,
    Ticket,
    TicketId,
    TicketType,
    TicketTypeId,
    UniqueCode,
)
from attendance.domain.errors import DuplicateTicketCodeError, TicketTypeInUseError
from attendance.stores.interfaces import AttendanceStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAttendanceStore(AttendanceStore):
    """Process-local store backed by dictionaries."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._ticket_types: dict[TicketTypeId, TicketType] = {}
        self._tickets: dict[TicketId, Ticket] = {}
        self._events: list[AttendanceEvent] = []
        self._certificates: dict[TicketId, Certificate] = {}
        self._lock = threading.Lock()

    def list_ticket_types(self) -> list[TicketType]:
        return list(self._ticket_types.values())

    def get_ticket_type(self, ticket_type_id: TicketTypeId) -> TicketType | None:
        return self._ticket_types.get(ticket_type_id)

    def create_ticket_type(self, name: str, minimum_hours: Hours) -> TicketType:
        ticket_type = TicketType(
            id=TicketTypeId(uuid4()),
            name=name,
            minimum_hours_for_certificate=minimum_hours,
            created_at=self._clock(),
        )
        self._ticket_types[ticket_type.id] = ticket_type
        return ticket_type

    def update_ticket_type(
        self,
        ticket_type_id: TicketTypeId,
        *,
        name: str | None = None,
        minimum_hours: Hours | None = None,
    ) -> TicketType | None:
        current = self._ticket_types.get(ticket_type_id)
        if current is None:
            return None
        changes = {}
        if name is not None:
            changes["name"] = name
        if minimum_hours is not None:
            changes["minimum_hours_for_certificate"] = minimum_hours
        updated = replace(current, **changes)
        self._ticket_types[ticket_type_id] = updated
        return updated

    def delete_ticket_type(self, ticket_type_id: TicketTypeId) -> bool:
        if ticket_type_id not in self._ticket_types:
            return False
        if any(t.ticket_type_id == ticket_type_id for t in self._tickets.values()):
            raise TicketTypeInUseError(str(ticket_type_id))
        del self._ticket_types[ticket_type_id]
        return True

    def list_tickets(self) -> list[Ticket]:
        return list(self._tickets.values())

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        return self._tickets.get(ticket_id)

    def find_ticket_by_code(self, code: UniqueCode) -> Ticket | None:
        for ticket in self._tickets.values():
            if ticket.unique_code == code:
                return ticket
        return None

    def create_ticket(
        self,
        name: str,
        email: str,
        ticket_type_id: TicketTypeId,
        unique_code: UniqueCode | None = None,
    ) -> Ticket:
        code = unique_code or UniqueCode.generate()
        with self._lock:
            if self.find_ticket_by_code(code) is not None:
                raise DuplicateTicketCodeError(str(code))
            ticket = Ticket(
                id=TicketId(uuid4()),
                name=name,
                email=email,
                unique_code=code,
                ticket_type_id=ticket_type_id,
                created_at=self._clock(),
            )
            self._tickets[ticket.id] = ticket
        return ticket

    def update_ticket(
        self,
        ticket_id: TicketId,
        *,
        name: str | None = None,
        email: str | None = None,
        ticket_type_id: TicketTypeId | None = None,
    ) -> Ticket | None:
        current = self._tickets.get(ticket_id)
        if current is None:
            return None
        changes = {
            field: value
            for field, value in (
                ("name", name),
                ("email", email),
                ("ticket_type_id", ticket_type_id),
            )
            if value is not None
        }
        updated = replace(current, **changes)
        self._tickets[ticket_id] = updated
        return updated

    def delete_ticket(self, ticket_id: TicketId) -> bool:
        if self._tickets.pop(ticket_id, None) is None:
            return False
        self._events = [e for e in self._events if e.ticket_id != ticket_id]
        self._certificates.pop(ticket_id, None)
        return True

    def list_attendance_events(self) -> list[AttendanceEvent]:
        return list(self._events)

    def list_attendance_events_for_ticket(self, ticket_id: TicketId) -> list[AttendanceEvent]:
        return [e for e in self._events if e.ticket_id == ticket_id]

    def create_attendance_event(
        self, ticket_id: TicketId, timestamp: datetime, kind: AttendanceKind
    ) -> AttendanceEvent:
        event = AttendanceEvent(
            id=uuid4(),
            ticket_id=ticket_id,
            timestamp=timestamp,
            kind=kind,
            recorded_at=self._clock(),
        )
        self._events.append(event)
        return event

    def list_certificates(self) -> list[Certificate]:
        return sorted(self._certificates.values(), key=lambda c: c.generated_at)

    def get_certificate_for_ticket(self, ticket_id: TicketId) -> Certificate | None:
        return self._certificates.get(ticket_id)

    def create_certificate_if_absent(
        self, ticket_id: TicketId, participation_hours: Hours, generated_at: datetime
    ) -> tuple[Certificate, bool]:
        with self._lock:
            existing = self._certificates.get(ticket_id)
            if existing is not None:
                return existing, False
            certificate = Certificate(
                id=uuid4(),
                ticket_id=ticket_id,
                participation_hours=participation_hours,
                generated_at=generated_at,
            )
            self._certificates[ticket_id] = certificate
        return certificate, True

    def mark_certificate_downloaded(self, certificate_id: UUID) -> Certificate | None:
        for ticket_id, certificate in self._certificates.items():
            if certificate.id == certificate_id:
                updated = replace(certificate, downloaded=True)
                self._certificates[ticket_id] = updated
                return updated
        return None
