from attendance.domain.models import (
    AttendanceEvent,
    AttendanceKind,
    Certificate,
    ImportIssue,
    ImportReport,
    ParticipantsReport,
    ParticipantStatus,
    Ticket,
    TicketType,
)
from attendance.domain.value_objects import Hours, TicketId, TicketTypeId, UniqueCode

__all__ = [
    "AttendanceEvent",
    "AttendanceKind",
    "Certificate",
    "ImportIssue",
    "ImportReport",
    "ParticipantsReport",
    "ParticipantStatus",
    "Ticket",
    "TicketType",
    "TicketId",
    "TicketTypeId",
    "Hours",
    "UniqueCode",
]
