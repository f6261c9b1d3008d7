"""Domain primitives that enforce validity at creation time."""

import math
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Self
from uuid import UUID

UNIQUE_CODE_ALPHABET = string.ascii_lowercase + string.digits
UNIQUE_CODE_LENGTH = 20


@dataclass(frozen=True)
class TicketId:
    """Unique identifier for a Ticket."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TicketTypeId:
    """Unique identifier for a TicketType."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Hours:
    """Non-negative amount of hours."""

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValueError("Hours must be a number")
        if not math.isfinite(self.value):
            raise ValueError("Hours must be a finite number")
        if self.value < 0:
            raise ValueError("Hours cannot be negative")

    def __str__(self) -> str:
        return f"{self.value:.2f}"


@dataclass(frozen=True)
class UniqueCode:
    """Alphanumeric ticket code, stored lower-case.

    Codes are printed into QR codes and URLs, so only ASCII letters and
    digits are accepted.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Unique code cannot be empty")
        if not (self.value.isascii() and self.value.isalnum()):
            raise ValueError("Unique code must be alphanumeric")
        if self.value != self.value.lower():
            raise ValueError("Unique code must be lower-case")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().lower())

    @classmethod
    def generate(cls) -> Self:
        return cls(
            value="".join(
                secrets.choice(UNIQUE_CODE_ALPHABET) for _ in range(UNIQUE_CODE_LENGTH)
            )
        )

    def __str__(self) -> str:
        return self.value


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are taken to be UTC.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed