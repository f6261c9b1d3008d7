"""Attendance service - check-in/check-out and participant status.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from attendance.domain import (
    AttendanceEvent,
    AttendanceKind,
    Certificate,
    ImportIssue,
    ImportReport,
    ParticipantsReport,
    ParticipantStatus,
    Ticket,
    TicketId,
    UniqueCode,
)
from attendance.domain.errors import (
    DomainError,
    TicketNotFoundError,
    TicketTypeNotFoundError,
)
from attendance.domain.value_objects import parse_timestamp
from attendance.services._ids import parse_certificate_id, parse_ticket_id
from attendance.services.cache import PARTICIPANT_STATUSES_KEY, ReadThroughCache
from attendance.services.certificate_service import CertificateIssuanceController
from attendance.services.status_resolver import ParticipantStatusResolver
from attendance.stores.interfaces import AttendanceStore

logger = logging.getLogger(__name__)

# Older exports spell the kinds without the underscore.
_KIND_ALIASES = {
    "check_in": AttendanceKind.CHECK_IN,
    "checkin": AttendanceKind.CHECK_IN,
    "check_out": AttendanceKind.CHECK_OUT,
    "checkout": AttendanceKind.CHECK_OUT,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class CheckOutResult:
    """A recorded check-out and the certificate it triggered, if any."""

    event: AttendanceEvent
    certificate: Certificate | None = None


class AttendanceService:
    """Service for check-in/check-out and status operations."""

    def __init__(
        self,
        store: AttendanceStore,
        cache: ReadThroughCache,
        resolver: ParticipantStatusResolver,
        certificates: CertificateIssuanceController,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._cache = cache
        self._resolver = resolver
        self._certificates = certificates
        self._clock = clock

    def check_in(self, ticket_id: str, timestamp: datetime | None = None) -> AttendanceEvent:
        """Record a check-in, now or at a backdated ``timestamp``.

        Raises:
            InvalidIdError: If the ticket_id is not a valid UUID.
            TicketNotFoundError: If the ticket does not exist.
        """
        ticket = self._require_ticket(parse_ticket_id(ticket_id))
        return self._record(ticket, AttendanceKind.CHECK_IN, timestamp)

    def check_out(self, ticket_id: str, timestamp: datetime | None = None) -> CheckOutResult:
        """Record a check-out and issue the certificate if it became due.

        Raises:
            InvalidIdError: If the ticket_id is not a valid UUID.
            TicketNotFoundError: If the ticket does not exist.
            TicketTypeNotFoundError: If the ticket references a missing type;
                nothing is recorded then.
        """
        ticket = self._require_ticket(parse_ticket_id(ticket_id))
        return self._check_out(ticket, timestamp)

    def check_in_by_code(self, code: str, timestamp: datetime | None = None) -> AttendanceEvent:
        ticket = self._ticket_by_code(code)
        return self._record(ticket, AttendanceKind.CHECK_IN, timestamp)

    def check_out_by_code(self, code: str, timestamp: datetime | None = None) -> CheckOutResult:
        ticket = self._ticket_by_code(code)
        return self._check_out(ticket, timestamp)

    def get_status(self, ticket_id: str) -> ParticipantStatus:
        return self._resolver.resolve(parse_ticket_id(ticket_id))

    def get_all_statuses(self) -> list[ParticipantStatus]:
        return list(self._resolver.resolve_all())

    def generate_certificate(self, ticket_id: str) -> Certificate:
        return self._certificates.generate(parse_ticket_id(ticket_id))

    def list_certificates(self) -> list[Certificate]:
        return self._certificates.list_certificates()

    def mark_certificate_downloaded(self, certificate_id: str) -> Certificate:
        return self._certificates.mark_downloaded(parse_certificate_id(certificate_id))

    def participants_report(self) -> ParticipantsReport:
        participants = tuple(self._resolver.resolve_all())
        return ParticipantsReport(
            total_participants=len(participants),
            checked_in_count=sum(1 for p in participants if p.is_checked_in),
            eligible_for_certificate=sum(
                1 for p in participants if p.is_eligible_for_certificate
            ),
            certificates_generated=sum(1 for p in participants if p.certificate_generated),
            participants=participants,
            generated_at=self._clock(),
        )

    def import_attendance(self, records: Iterable[Mapping[str, Any]]) -> ImportReport:
        """Record a batch of attendance events, skipping malformed items.

        Each record names its ticket by ``ticket_id`` or ``code`` and carries
        an ISO-8601 ``timestamp`` and a ``kind``. Tickets that received a
        check-out get their certificate issued when it became due.
        """
        created = 0
        errors: list[ImportIssue] = []
        checked_out: dict[TicketId, Ticket] = {}
        for index, record in enumerate(records):
            try:
                ticket, timestamp, kind = self._parse_record(record)
            except DomainError as exc:
                errors.append(ImportIssue(index=index, reason=exc.message))
                continue
            except (TypeError, ValueError) as exc:
                errors.append(ImportIssue(index=index, reason=str(exc)))
                continue
            self._store.create_attendance_event(ticket.id, timestamp, kind)
            created += 1
            if kind is AttendanceKind.CHECK_OUT:
                checked_out[ticket.id] = ticket

        if created:
            self._cache.invalidate(PARTICIPANT_STATUSES_KEY)
        for ticket_id in checked_out:
            self._certificates.issue_if_eligible(ticket_id)
        if errors:
            logger.warning(
                "Attendance import rejected %d of %d records",
                len(errors),
                created + len(errors),
            )
        return ImportReport(created_events=created, errors=tuple(errors))

    def _parse_record(
        self, record: Mapping[str, Any]
    ) -> tuple[Ticket, datetime, AttendanceKind]:
        if not isinstance(record, Mapping):
            raise TypeError("Attendance record must be an object")
        missing = [f for f in ("timestamp", "kind") if not record.get(f)]
        if not (record.get("ticket_id") or record.get("code")):
            missing.insert(0, "ticket_id or code")
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        kind = _KIND_ALIASES.get(str(record["kind"]).strip().lower())
        if kind is None:
            raise ValueError(f"Unknown attendance kind: {record['kind']}")
        timestamp = parse_timestamp(str(record["timestamp"]))
        if record.get("ticket_id"):
            ticket = self._require_ticket(parse_ticket_id(record["ticket_id"]))
        else:
            ticket = self._ticket_by_code(str(record["code"]))
        if kind is AttendanceKind.CHECK_OUT:
            self._require_ticket_type(ticket)
        return ticket, timestamp, kind

    def _require_ticket(self, ticket_id: TicketId) -> Ticket:
        ticket = self._store.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(str(ticket_id))
        return ticket

    def _require_ticket_type(self, ticket: Ticket) -> None:
        if self._store.get_ticket_type(ticket.ticket_type_id) is None:
            raise TicketTypeNotFoundError(str(ticket.ticket_type_id))

    def _ticket_by_code(self, code: str) -> Ticket:
        try:
            unique_code = UniqueCode.from_string(code)
        except ValueError as exc:
            raise TicketNotFoundError(code) from exc
        ticket = self._store.find_ticket_by_code(unique_code)
        if ticket is None:
            raise TicketNotFoundError(code)
        return ticket

    def _record(
        self, ticket: Ticket, kind: AttendanceKind, timestamp: datetime | None
    ) -> AttendanceEvent:
        at = _aware(timestamp) if timestamp is not None else self._clock()
        event = self._store.create_attendance_event(ticket.id, at, kind)
        self._cache.invalidate(PARTICIPANT_STATUSES_KEY)
        logger.info(
            "%s for ticket %s at %s%s",
            "Check-in" if kind is AttendanceKind.CHECK_IN else "Check-out",
            ticket.id,
            at.isoformat(),
            " (manual)" if timestamp is not None else "",
        )
        return event

    def _check_out(self, ticket: Ticket, timestamp: datetime | None) -> CheckOutResult:
        # Certificate issuance needs the type; fail before anything is written.
        self._require_ticket_type(ticket)
        event = self._record(ticket, AttendanceKind.CHECK_OUT, timestamp)
        certificate = self._certificates.issue_if_eligible(ticket.id)
        return CheckOutResult(event=event, certificate=certificate)
