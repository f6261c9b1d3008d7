"""Domain error codes for the attendance module.

Errors fall in four classes that callers can tell apart: not found,
conflict, validation and store unavailable.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    TICKET_TYPE_NOT_FOUND = "TICKET_TYPE_NOT_FOUND"
    CERTIFICATE_NOT_FOUND = "CERTIFICATE_NOT_FOUND"
    TICKET_TYPE_IN_USE = "TICKET_TYPE_IN_USE"
    DUPLICATE_TICKET_CODE = "DUPLICATE_TICKET_CODE"
    CERTIFICATE_NOT_ELIGIBLE = "CERTIFICATE_NOT_ELIGIBLE"
    INVALID_ID = "INVALID_ID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced record does not exist."""


class ConflictError(DomainError):
    """The operation conflicts with the current state of the records."""


class ValidationError(DomainError):
    """Input fields are malformed."""


class StoreUnavailableError(DomainError):
    """The underlying persistence call failed."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Attendance store is unavailable",
        )
        self.operation = operation


class TicketNotFoundError(NotFoundError):
    """Raised when a ticket is not found."""

    def __init__(self, ticket_ref: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_ref = ticket_ref


class TicketTypeNotFoundError(NotFoundError):
    """Raised when a ticket type is not found."""

    def __init__(self, ticket_type_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_TYPE_NOT_FOUND,
            message="Ticket type not found",
        )
        self.ticket_type_id = ticket_type_id


class CertificateNotFoundError(NotFoundError):
    """Raised when a certificate is not found."""

    def __init__(self, certificate_id: str) -> None:
        super().__init__(
            code=ErrorCode.CERTIFICATE_NOT_FOUND,
            message="Certificate not found",
        )
        self.certificate_id = certificate_id


class TicketTypeInUseError(ConflictError):
    """Raised when deleting a ticket type that tickets still reference."""

    def __init__(self, ticket_type_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_TYPE_IN_USE,
            message="Ticket type has tickets associated with it",
        )
        self.ticket_type_id = ticket_type_id


class DuplicateTicketCodeError(ConflictError):
    """Raised when a ticket code is already taken."""

    def __init__(self, code: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_TICKET_CODE,
            message="Ticket code already in use",
        )
        self.ticket_code = code


class CertificateNotEligibleError(ConflictError):
    """Raised when a certificate is requested before the minimum hours."""

    def __init__(self, ticket_id: str, total_hours: float, minimum_hours: float) -> None:
        super().__init__(
            code=ErrorCode.CERTIFICATE_NOT_ELIGIBLE,
            message=(
                f"Participant has {total_hours:.2f} of the "
                f"{minimum_hours:.2f} hours required for a certificate"
            ),
        )
        self.ticket_id = ticket_id


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str = "record") -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID format",
        )


class RecordValidationError(ValidationError):
    """Raised when record fields are missing or malformed.

    ``details`` maps field names to the reason they were rejected.
    """

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=message,
        )
        self.details = dict(details or {})
