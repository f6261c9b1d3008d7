"""Registration service - ticket types, tickets and participant import."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email

from attendance.domain import (
    Hours,
    ImportIssue,
    ImportReport,
    Ticket,
    TicketType,
    TicketTypeId,
    UniqueCode,
)
from attendance.domain.errors import (
    DomainError,
    RecordValidationError,
    TicketNotFoundError,
    TicketTypeNotFoundError,
)
from attendance.services._ids import parse_ticket_id, parse_ticket_type_id
from attendance.services.cache import (
    PARTICIPANT_STATUSES_KEY,
    TICKET_TYPES_KEY,
    TICKETS_KEY,
    ReadThroughCache,
)
from attendance.services.status_resolver import ParticipantStatusResolver
from attendance.stores.interfaces import AttendanceStore

logger = logging.getLogger(__name__)


def _clean_name(value: Any, field: str = "name") -> str:
    name = str(value or "").strip()
    if not name:
        raise RecordValidationError(f"{field.capitalize()} is required", {field: "required"})
    return name


def _clean_email(value: Any) -> str:
    email = str(value or "").strip()
    try:
        validate_email(email)
    except DjangoValidationError as exc:
        raise RecordValidationError("Invalid email address", {"email": "invalid"}) from exc
    return email


def _clean_hours(value: Any) -> Hours:
    try:
        return Hours(float(value))
    except (TypeError, ValueError) as exc:
        raise RecordValidationError(
            "Invalid minimum hours", {"minimum_hours_for_certificate": str(exc)}
        ) from exc


def _clean_code(value: Any) -> UniqueCode | None:
    if value in (None, ""):
        return None
    try:
        return UniqueCode.from_string(str(value))
    except ValueError as exc:
        raise RecordValidationError(
            "Invalid ticket code", {"unique_code": str(exc)}
        ) from exc


class RegistrationService:
    """Service for configuring ticket types and participant tickets."""

    def __init__(
        self,
        store: AttendanceStore,
        cache: ReadThroughCache,
        resolver: ParticipantStatusResolver,
    ) -> None:
        self._store = store
        self._cache = cache
        self._resolver = resolver

    # Ticket types

    def list_ticket_types(self) -> list[TicketType]:
        return list(self._resolver.ticket_types())

    def create_ticket_type(self, name: str, minimum_hours: Any = 0) -> TicketType:
        ticket_type = self._store.create_ticket_type(
            _clean_name(name), _clean_hours(minimum_hours)
        )
        self._ticket_types_changed()
        logger.info("Created ticket type %s (%s)", ticket_type.id, ticket_type.name)
        return ticket_type

    def update_ticket_type(
        self, ticket_type_id: str, *, name: Any = None, minimum_hours: Any = None
    ) -> TicketType:
        """Update a ticket type.

        Raises:
            InvalidIdError: If the ticket_type_id is not a valid UUID.
            TicketTypeNotFoundError: If the ticket type does not exist.
        """
        type_id = parse_ticket_type_id(ticket_type_id)
        updated = self._store.update_ticket_type(
            type_id,
            name=_clean_name(name) if name is not None else None,
            minimum_hours=_clean_hours(minimum_hours) if minimum_hours is not None else None,
        )
        if updated is None:
            raise TicketTypeNotFoundError(ticket_type_id)
        self._ticket_types_changed()
        return updated

    def delete_ticket_type(self, ticket_type_id: str) -> None:
        """Delete a ticket type.

        Raises:
            TicketTypeNotFoundError: If the ticket type does not exist.
            TicketTypeInUseError: If tickets still reference the type.
        """
        if not self._store.delete_ticket_type(parse_ticket_type_id(ticket_type_id)):
            raise TicketTypeNotFoundError(ticket_type_id)
        self._ticket_types_changed()
        logger.info("Deleted ticket type %s", ticket_type_id)

    # Tickets

    def list_tickets(self) -> list[Ticket]:
        return list(self._resolver.tickets())

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self._store.get_ticket(parse_ticket_id(ticket_id))
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def find_ticket_by_code(self, code: str) -> Ticket:
        try:
            unique_code = UniqueCode.from_string(code)
        except ValueError as exc:
            raise TicketNotFoundError(code) from exc
        ticket = self._store.find_ticket_by_code(unique_code)
        if ticket is None:
            raise TicketNotFoundError(code)
        return ticket

    def create_ticket(
        self,
        name: str,
        email: str,
        ticket_type_id: str,
        unique_code: str | None = None,
    ) -> Ticket:
        """Register a participant.

        Raises:
            RecordValidationError: If a field is malformed.
            TicketTypeNotFoundError: If the ticket type does not exist.
            DuplicateTicketCodeError: If the code is already in use.
        """
        clean_name = _clean_name(name)
        clean_email = _clean_email(email)
        code = _clean_code(unique_code)
        type_id = self._require_ticket_type(ticket_type_id)
        ticket = self._store.create_ticket(clean_name, clean_email, type_id, code)
        self._tickets_changed()
        logger.info("Registered ticket %s for %s", ticket.id, ticket.email)
        return ticket

    def update_ticket(
        self,
        ticket_id: str,
        *,
        name: Any = None,
        email: Any = None,
        ticket_type_id: str | None = None,
    ) -> Ticket:
        target = parse_ticket_id(ticket_id)
        updated = self._store.update_ticket(
            target,
            name=_clean_name(name) if name is not None else None,
            email=_clean_email(email) if email is not None else None,
            ticket_type_id=(
                self._require_ticket_type(ticket_type_id)
                if ticket_type_id is not None
                else None
            ),
        )
        if updated is None:
            raise TicketNotFoundError(ticket_id)
        self._tickets_changed()
        return updated

    def delete_ticket(self, ticket_id: str) -> None:
        """Delete a ticket together with its attendance and certificate."""
        if not self._store.delete_ticket(parse_ticket_id(ticket_id)):
            raise TicketNotFoundError(ticket_id)
        self._tickets_changed()
        logger.info("Deleted ticket %s", ticket_id)

    def import_participants(self, items: Iterable[Mapping[str, Any]]) -> ImportReport:
        """Register participants from exported records.

        Each item carries ``name``, ``email`` and ``sector``; ``sector`` names
        the ticket type, which is created with no minimum hours when missing.
        An optional ``codebar`` becomes the ticket code. Items that are
        malformed or whose email or code is already registered are reported
        and skipped.
        """
        types_by_name = {t.name.lower(): t for t in self._store.list_ticket_types()}
        tickets = self._store.list_tickets()
        emails = {t.email.lower() for t in tickets}
        codes = {t.unique_code for t in tickets}

        created_types = 0
        created_tickets = 0
        errors: list[ImportIssue] = []
        for index, item in enumerate(items):
            try:
                if not isinstance(item, Mapping):
                    raise RecordValidationError("Item must be an object")
                missing = [f for f in ("name", "email", "sector") if not item.get(f)]
                if missing:
                    raise RecordValidationError(
                        f"Missing required fields: {', '.join(missing)}",
                        {f: "required" for f in missing},
                    )
                name = _clean_name(item["name"])
                email = _clean_email(item["email"])
                sector = _clean_name(item["sector"], "sector")
                code = _clean_code(item.get("codebar"))
                if email.lower() in emails or (code is not None and code in codes):
                    raise RecordValidationError(
                        f"Participant already registered: {email}"
                    )

                ticket_type = types_by_name.get(sector.lower())
                if ticket_type is None:
                    ticket_type = self._store.create_ticket_type(sector, Hours(0))
                    types_by_name[sector.lower()] = ticket_type
                    created_types += 1

                ticket = self._store.create_ticket(name, email, ticket_type.id, code)
            except DomainError as exc:
                errors.append(ImportIssue(index=index, reason=exc.message))
                continue
            emails.add(ticket.email.lower())
            codes.add(ticket.unique_code)
            created_tickets += 1

        if created_types:
            self._ticket_types_changed()
        if created_tickets:
            self._tickets_changed()
        logger.info(
            "Participant import: %d ticket types, %d tickets created, %d rejected",
            created_types,
            created_tickets,
            len(errors),
        )
        return ImportReport(
            created_ticket_types=created_types,
            created_tickets=created_tickets,
            errors=tuple(errors),
        )

    def _require_ticket_type(self, ticket_type_id: str) -> TicketTypeId:
        type_id = parse_ticket_type_id(ticket_type_id)
        if self._store.get_ticket_type(type_id) is None:
            raise TicketTypeNotFoundError(ticket_type_id)
        return type_id

    def _ticket_types_changed(self) -> None:
        self._cache.invalidate(TICKET_TYPES_KEY)
        self._cache.invalidate(PARTICIPANT_STATUSES_KEY)

    def _tickets_changed(self) -> None:
        self._cache.invalidate(TICKETS_KEY)
        self._cache.invalidate(PARTICIPANT_STATUSES_KEY)
