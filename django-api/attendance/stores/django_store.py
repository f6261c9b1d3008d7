"""Django ORM implementation of the AttendanceStore.

Rows are converted to domain models at this boundary; rows that no longer
satisfy the domain rules raise RecordValidationError instead of leaking
malformed records upward. Database failures surface as
StoreUnavailableError and are not retried here.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from uuid import UUID

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import ProtectedError

from attendance import models as orm
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
from attendance.domain.errors import (
    DuplicateTicketCodeError,
    RecordValidationError,
    StoreUnavailableError,
    TicketNotFoundError,
    TicketTypeInUseError,
)
from attendance.stores.interfaces import AttendanceStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError:
        raise
    except DatabaseError as exc:
        logger.error("Store operation %s failed: %s", operation, exc)
        raise StoreUnavailableError(operation) from exc


def _ticket_type_from_row(row: orm.TicketType) -> TicketType:
    try:
        return TicketType(
            id=TicketTypeId(row.id),
            name=row.name,
            minimum_hours_for_certificate=Hours(row.minimum_hours_for_certificate),
            created_at=row.created_at,
        )
    except ValueError as exc:
        raise RecordValidationError(
            "Stored ticket type is malformed",
            {"minimum_hours_for_certificate": str(exc)},
        ) from exc


def _ticket_from_row(row: orm.Ticket) -> Ticket:
    try:
        code = UniqueCode(row.unique_code)
    except ValueError as exc:
        raise RecordValidationError(
            "Stored ticket is malformed", {"unique_code": str(exc)}
        ) from exc
    return Ticket(
        id=TicketId(row.id),
        name=row.name,
        email=row.email,
        unique_code=code,
        ticket_type_id=TicketTypeId(row.ticket_type_id),
        created_at=row.created_at,
    )


def _event_from_row(row: orm.AttendanceEvent) -> AttendanceEvent:
    try:
        kind = AttendanceKind(row.kind)
    except ValueError as exc:
        raise RecordValidationError(
            "Stored attendance event is malformed", {"kind": str(exc)}
        ) from exc
    return AttendanceEvent(
        id=row.event_id,
        ticket_id=TicketId(row.ticket_id),
        timestamp=row.timestamp,
        kind=kind,
        recorded_at=row.recorded_at,
    )


def _certificate_from_row(row: orm.Certificate) -> Certificate:
    try:
        hours = Hours(row.participation_hours)
    except ValueError as exc:
        raise RecordValidationError(
            "Stored certificate is malformed", {"participation_hours": str(exc)}
        ) from exc
    return Certificate(
        id=row.id,
        ticket_id=TicketId(row.ticket_id),
        participation_hours=hours,
        generated_at=row.generated_at,
        downloaded=row.downloaded,
    )


class DjangoAttendanceStore(AttendanceStore):
    """Relational store using the Django ORM."""

    def list_ticket_types(self) -> list[TicketType]:
        with _store_errors("list_ticket_types"):
            return [_ticket_type_from_row(row) for row in orm.TicketType.objects.all()]

    def get_ticket_type(self, ticket_type_id: TicketTypeId) -> TicketType | None:
        with _store_errors("get_ticket_type"):
            row = orm.TicketType.objects.filter(pk=ticket_type_id.value).first()
        return _ticket_type_from_row(row) if row else None

    def create_ticket_type(self, name: str, minimum_hours: Hours) -> TicketType:
        with _store_errors("create_ticket_type"):
            row = orm.TicketType.objects.create(
                name=name, minimum_hours_for_certificate=minimum_hours.value
            )
        return _ticket_type_from_row(row)

    def update_ticket_type(
        self,
        ticket_type_id: TicketTypeId,
        *,
        name: str | None = None,
        minimum_hours: Hours | None = None,
    ) -> TicketType | None:
        with _store_errors("update_ticket_type"):
            row = orm.TicketType.objects.filter(pk=ticket_type_id.value).first()
            if row is None:
                return None
            if name is not None:
                row.name = name
            if minimum_hours is not None:
                row.minimum_hours_for_certificate = minimum_hours.value
            row.save()
        return _ticket_type_from_row(row)

    def delete_ticket_type(self, ticket_type_id: TicketTypeId) -> bool:
        with _store_errors("delete_ticket_type"):
            row = orm.TicketType.objects.filter(pk=ticket_type_id.value).first()
            if row is None:
                return False
            try:
                row.delete()
            except ProtectedError as exc:
                raise TicketTypeInUseError(str(ticket_type_id)) from exc
        return True

    def list_tickets(self) -> list[Ticket]:
        with _store_errors("list_tickets"):
            return [_ticket_from_row(row) for row in orm.Ticket.objects.all()]

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        with _store_errors("get_ticket"):
            row = orm.Ticket.objects.filter(pk=ticket_id.value).first()
        return _ticket_from_row(row) if row else None

    def find_ticket_by_code(self, code: UniqueCode) -> Ticket | None:
        with _store_errors("find_ticket_by_code"):
            row = orm.Ticket.objects.filter(unique_code=code.value).first()
        return _ticket_from_row(row) if row else None

    def create_ticket(
        self,
        name: str,
        email: str,
        ticket_type_id: TicketTypeId,
        unique_code: UniqueCode | None = None,
    ) -> Ticket:
        code = unique_code or UniqueCode.generate()
        with _store_errors("create_ticket"):
            try:
                with transaction.atomic():
                    row = orm.Ticket.objects.create(
                        name=name,
                        email=email,
                        unique_code=code.value,
                        ticket_type_id=ticket_type_id.value,
                    )
            except IntegrityError as exc:
                if orm.Ticket.objects.filter(unique_code=code.value).exists():
                    raise DuplicateTicketCodeError(code.value) from exc
                raise RecordValidationError(
                    "Ticket references an unknown ticket type",
                    {"ticket_type_id": str(ticket_type_id)},
                ) from exc
        return _ticket_from_row(row)

    def update_ticket(
        self,
        ticket_id: TicketId,
        *,
        name: str | None = None,
        email: str | None = None,
        ticket_type_id: TicketTypeId | None = None,
    ) -> Ticket | None:
        with _store_errors("update_ticket"):
            row = orm.Ticket.objects.filter(pk=ticket_id.value).first()
            if row is None:
                return None
            if name is not None:
                row.name = name
            if email is not None:
                row.email = email
            if ticket_type_id is not None:
                row.ticket_type_id = ticket_type_id.value
            row.save()
        return _ticket_from_row(row)

    def delete_ticket(self, ticket_id: TicketId) -> bool:
        with _store_errors("delete_ticket"):
            deleted, _ = orm.Ticket.objects.filter(pk=ticket_id.value).delete()
        return deleted > 0

    def list_attendance_events(self) -> list[AttendanceEvent]:
        with _store_errors("list_attendance_events"):
            return [_event_from_row(row) for row in orm.AttendanceEvent.objects.all()]

    def list_attendance_events_for_ticket(self, ticket_id: TicketId) -> list[AttendanceEvent]:
        with _store_errors("list_attendance_events_for_ticket"):
            rows = orm.AttendanceEvent.objects.filter(ticket_id=ticket_id.value)
            return [_event_from_row(row) for row in rows]

    def create_attendance_event(
        self, ticket_id: TicketId, timestamp: datetime, kind: AttendanceKind
    ) -> AttendanceEvent:
        with _store_errors("create_attendance_event"):
            row = orm.AttendanceEvent.objects.create(
                ticket_id=ticket_id.value, timestamp=timestamp, kind=kind.value
            )
        return _event_from_row(row)

    def list_certificates(self) -> list[Certificate]:
        with _store_errors("list_certificates"):
            return [_certificate_from_row(row) for row in orm.Certificate.objects.all()]

    def get_certificate_for_ticket(self, ticket_id: TicketId) -> Certificate | None:
        with _store_errors("get_certificate_for_ticket"):
            row = orm.Certificate.objects.filter(ticket_id=ticket_id.value).first()
        return _certificate_from_row(row) if row else None

    def create_certificate_if_absent(
        self, ticket_id: TicketId, participation_hours: Hours, generated_at: datetime
    ) -> tuple[Certificate, bool]:
        with _store_errors("create_certificate_if_absent"):
            try:
                with transaction.atomic():
                    row = orm.Certificate.objects.create(
                        ticket_id=ticket_id.value,
                        participation_hours=participation_hours.value,
                        generated_at=generated_at,
                    )
            except IntegrityError as exc:
                # Lost the race against a concurrent issuer, or the ticket is gone.
                row = orm.Certificate.objects.filter(ticket_id=ticket_id.value).first()
                if row is None:
                    raise TicketNotFoundError(str(ticket_id)) from exc
                return _certificate_from_row(row), False
        return _certificate_from_row(row), True

    def mark_certificate_downloaded(self, certificate_id: UUID) -> Certificate | None:
        with _store_errors("mark_certificate_downloaded"):
            updated = orm.Certificate.objects.filter(pk=certificate_id).update(downloaded=True)
            if not updated:
                return None
            row = orm.Certificate.objects.get(pk=certificate_id)
        return _certificate_from_row(row)
