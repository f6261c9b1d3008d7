from uuid import UUID

from attendance.domain import TicketId, TicketTypeId
from attendance.domain.errors import InvalidIdError


def parse_ticket_id(value: str) -> TicketId:
    try:
        return TicketId.from_string(str(value))
    except ValueError as exc:
        raise InvalidIdError("ticket") from exc


def parse_ticket_type_id(value: str) -> TicketTypeId:
    try:
        return TicketTypeId.from_string(str(value))
    except ValueError as exc:
        raise InvalidIdError("ticket type") from exc


def parse_certificate_id(value: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError as exc:
        raise InvalidIdError("certificate") from exc
