"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

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


class AttendanceStore(ABC):
    """Interface for attendance persistence operations."""

    # Ticket types

    @abstractmethod
    def list_ticket_types(self) -> list[TicketType]:
        """Return all ticket types ordered by created_at ascending."""
        ...

    @abstractmethod
    def get_ticket_type(self, ticket_type_id: TicketTypeId) -> TicketType | None:
        """Return a ticket type by ID, or None if not found."""
        ...

    @abstractmethod
    def create_ticket_type(self, name: str, minimum_hours: Hours) -> TicketType:
        ...

    @abstractmethod
    def update_ticket_type(
        self,
        ticket_type_id: TicketTypeId,
        *,
        name: str | None = None,
        minimum_hours: Hours | None = None,
    ) -> TicketType | None:
        """Update the given fields; return None if the type does not exist."""
        ...

    @abstractmethod
    def delete_ticket_type(self, ticket_type_id: TicketTypeId) -> bool:
        """Delete a ticket type; return False if it did not exist.

        Raises:
            TicketTypeInUseError: If any ticket references the type.
        """
        ...

    # Tickets

    @abstractmethod
    def list_tickets(self) -> list[Ticket]:
        """Return all tickets ordered by created_at ascending."""
        ...

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        ...

    @abstractmethod
    def find_ticket_by_code(self, code: UniqueCode) -> Ticket | None:
        ...

    @abstractmethod
    def create_ticket(
        self,
        name: str,
        email: str,
        ticket_type_id: TicketTypeId,
        unique_code: UniqueCode | None = None,
    ) -> Ticket:
        """Create a ticket, generating a unique code when none is given.

        Raises:
            DuplicateTicketCodeError: If the code is already taken.
        """
        ...

    @abstractmethod
    def update_ticket(
        self,
        ticket_id: TicketId,
        *,
        name: str | None = None,
        email: str | None = None,
        ticket_type_id: TicketTypeId | None = None,
    ) -> Ticket | None:
        ...

    @abstractmethod
    def delete_ticket(self, ticket_id: TicketId) -> bool:
        """Delete a ticket together with its events and certificate."""
        ...

    # Attendance events

    @abstractmethod
    def list_attendance_events(self) -> list[AttendanceEvent]:
        """Return every event in insertion order."""
        ...

    @abstractmethod
    def list_attendance_events_for_ticket(self, ticket_id: TicketId) -> list[AttendanceEvent]:
        """Return the events of one ticket in insertion order."""
        ...

    @abstractmethod
    def create_attendance_event(
        self, ticket_id: TicketId, timestamp: datetime, kind: AttendanceKind
    ) -> AttendanceEvent:
        ...

    # Certificates

    @abstractmethod
    def list_certificates(self) -> list[Certificate]:
        """Return all certificates ordered by generated_at ascending."""
        ...

    @abstractmethod
    def get_certificate_for_ticket(self, ticket_id: TicketId) -> Certificate | None:
        ...

    @abstractmethod
    def create_certificate_if_absent(
        self, ticket_id: TicketId, participation_hours: Hours, generated_at: datetime
    ) -> tuple[Certificate, bool]:
        """Create the ticket's certificate unless one already exists.

        Returns the stored certificate and whether this call created it.
        At most one certificate per ticket is ever stored.
        """
        ...

    @abstractmethod
    def mark_certificate_downloaded(self, certificate_id: UUID) -> Certificate | None:
        ...
