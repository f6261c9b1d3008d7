"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in attendance/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from attendance.domain.value_objects import Hours, TicketId, TicketTypeId, UniqueCode


class AttendanceKind(Enum):
    """Direction of an attendance event."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    id: TicketTypeId
    name: str
    minimum_hours_for_certificate: Hours
    created_at: datetime


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a participant's Ticket."""

    id: TicketId
    name: str
    email: str
    unique_code: UniqueCode
    ticket_type_id: TicketTypeId
    created_at: datetime


@dataclass(frozen=True)
class AttendanceEvent:
    """A single check-in or check-out. Never mutated once recorded."""

    id: UUID
    ticket_id: TicketId
    timestamp: datetime
    kind: AttendanceKind
    recorded_at: datetime


@dataclass(frozen=True)
class Certificate:
    """Domain representation of an issued Certificate."""

    id: UUID
    ticket_id: TicketId
    participation_hours: Hours
    generated_at: datetime
    downloaded: bool = False


@dataclass(frozen=True)
class ParticipantStatus:
    """Derived view of one participant; recomputed on every resolution."""

    ticket: Ticket
    ticket_type: TicketType
    is_checked_in: bool
    total_hours: float
    is_eligible_for_certificate: bool
    certificate_generated: bool
    last_check_in: datetime | None
    check_history: tuple[AttendanceEvent, ...] = ()


@dataclass(frozen=True)
class ParticipantsReport:
    """Aggregate counters over every participant status."""

    total_participants: int
    checked_in_count: int
    eligible_for_certificate: int
    certificates_generated: int
    participants: tuple[ParticipantStatus, ...]
    generated_at: datetime


@dataclass(frozen=True)
class ImportIssue:
    """Reason a single item of a bulk import was rejected."""

    index: int
    reason: str


@dataclass(frozen=True)
class ImportReport:
    """Outcome of a bulk import; bad items never abort the batch."""

    created_ticket_types: int = 0
    created_tickets: int = 0
    created_events: int = 0
    errors: tuple[ImportIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors
