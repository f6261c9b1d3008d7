"""Participant status resolution.

Builds ParticipantStatus snapshots out of a ticket, its type, its event
history and its certificate. The single-ticket and bulk paths share
``build_status`` so they always agree.
"""

import logging
from collections import defaultdict

from attendance.conf import CacheTTLs
from attendance.domain import (
    AttendanceEvent,
    ParticipantStatus,
    Ticket,
    TicketId,
    TicketType,
)
from attendance.domain.accrual import accumulate
from attendance.domain.errors import TicketNotFoundError, TicketTypeNotFoundError
from attendance.services.cache import (
    PARTICIPANT_STATUSES_KEY,
    TICKET_TYPES_KEY,
    TICKETS_KEY,
    ReadThroughCache,
)
from attendance.stores.interfaces import AttendanceStore

logger = logging.getLogger(__name__)


def build_status(
    ticket: Ticket,
    ticket_type: TicketType,
    events: list[AttendanceEvent],
    certificate_generated: bool,
) -> ParticipantStatus:
    accrual = accumulate(events)
    total_hours = accrual.total_hours
    return ParticipantStatus(
        ticket=ticket,
        ticket_type=ticket_type,
        is_checked_in=accrual.is_checked_in,
        total_hours=total_hours,
        is_eligible_for_certificate=(
            total_hours >= ticket_type.minimum_hours_for_certificate.value
        ),
        certificate_generated=certificate_generated,
        last_check_in=accrual.last_check_in,
        check_history=accrual.history,
    )


class ParticipantStatusResolver:
    """Resolves participant statuses from a store snapshot."""

    def __init__(
        self,
        store: AttendanceStore,
        cache: ReadThroughCache,
        ttls: CacheTTLs | None = None,
    ) -> None:
        self._store = store
        self._cache = cache
        self._ttls = ttls or CacheTTLs()

    def ticket_types(self) -> list[TicketType]:
        return self._cache.get_or_load(
            TICKET_TYPES_KEY, self._ttls.ticket_types_ms, self._store.list_ticket_types
        )

    def tickets(self) -> list[Ticket]:
        return self._cache.get_or_load(
            TICKETS_KEY, self._ttls.tickets_ms, self._store.list_tickets
        )

    def resolve(self, ticket_id: TicketId) -> ParticipantStatus:
        """Return the fresh status of one ticket.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            TicketTypeNotFoundError: If the ticket references a missing type.
        """
        ticket = self._store.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(str(ticket_id))
        ticket_type = self._store.get_ticket_type(ticket.ticket_type_id)
        if ticket_type is None:
            logger.warning(
                "Ticket %s references missing ticket type %s",
                ticket.id,
                ticket.ticket_type_id,
            )
            raise TicketTypeNotFoundError(str(ticket.ticket_type_id))
        events = self._store.list_attendance_events_for_ticket(ticket_id)
        certificate = self._store.get_certificate_for_ticket(ticket_id)
        return build_status(ticket, ticket_type, events, certificate is not None)

    def resolve_all(self) -> list[ParticipantStatus]:
        """Return the status of every ticket, loading each collection once."""
        return self._cache.get_or_load(
            PARTICIPANT_STATUSES_KEY, self._ttls.statuses_ms, self._load_all
        )

    def _load_all(self) -> list[ParticipantStatus]:
        types_by_id = {ticket_type.id: ticket_type for ticket_type in self.ticket_types()}
        events_by_ticket: dict[TicketId, list[AttendanceEvent]] = defaultdict(list)
        for event in self._store.list_attendance_events():
            events_by_ticket[event.ticket_id].append(event)
        certified = {c.ticket_id for c in self._store.list_certificates()}

        statuses = []
        for ticket in self.tickets():
            ticket_type = types_by_id.get(ticket.ticket_type_id)
            if ticket_type is None:
                logger.warning(
                    "Skipping ticket %s: ticket type %s not found",
                    ticket.id,
                    ticket.ticket_type_id,
                )
                continue
            statuses.append(
                build_status(
                    ticket,
                    ticket_type,
                    events_by_ticket.get(ticket.id, []),
                    ticket.id in certified,
                )
            )
        return statuses
