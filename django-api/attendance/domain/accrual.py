"""Attendance accrual: reduce a raw event log to time served and presence.

Pure functions only. The pairing rules are the accrual policy that issued
certificates depend on:

- events are ordered by timestamp with a stable sort, so events sharing a
  timestamp keep the order the store returned them in (insertion order);
- a check-in replaces any pending check-in, so a check-in that is never
  closed contributes nothing;
- a check-out closes the pending check-in and adds the elapsed whole
  minutes when they are strictly positive; zero or negative spans and
  check-outs with nothing pending are dropped.

Presence is decided separately by "last event wins": the participant is
checked in when the latest check-in is strictly later than the latest
check-out.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from attendance.domain.models import AttendanceEvent, AttendanceKind

MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class Accrual:
    """Accrued time and presence for one ticket."""

    total_minutes: int
    is_checked_in: bool
    last_check_in: datetime | None
    history: tuple[AttendanceEvent, ...] = ()

    @property
    def total_hours(self) -> float:
        return self.total_minutes / MINUTES_PER_HOUR


def chronological(events: Iterable[AttendanceEvent]) -> list[AttendanceEvent]:
    """Sort events by timestamp, ties keeping their original order."""
    return sorted(events, key=lambda event: event.timestamp)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, truncated toward zero."""
    seconds = (end - start).total_seconds()
    return int(seconds / 60)


def accrued_minutes(ordered: Sequence[AttendanceEvent]) -> int:
    """Sum matched check-in/check-out spans of chronologically ordered events."""
    total = 0
    open_check_in: datetime | None = None
    for event in ordered:
        if event.kind is AttendanceKind.CHECK_IN:
            open_check_in = event.timestamp
        elif open_check_in is not None:
            minutes = elapsed_minutes(open_check_in, event.timestamp)
            if minutes > 0:
                total += minutes
            open_check_in = None
    return total


def latest_timestamp(
    ordered: Sequence[AttendanceEvent], kind: AttendanceKind
) -> datetime | None:
    matching = [event.timestamp for event in ordered if event.kind is kind]
    return matching[-1] if matching else None


def is_present(ordered: Sequence[AttendanceEvent]) -> bool:
    last_in = latest_timestamp(ordered, AttendanceKind.CHECK_IN)
    if last_in is None:
        return False
    last_out = latest_timestamp(ordered, AttendanceKind.CHECK_OUT)
    return last_out is None or last_in > last_out


def accumulate(events: Iterable[AttendanceEvent]) -> Accrual:
    """Compute accrued time, presence and last check-in for one ticket."""
    ordered = chronological(events)
    return Accrual(
        total_minutes=accrued_minutes(ordered),
        is_checked_in=is_present(ordered),
        last_check_in=latest_timestamp(ordered, AttendanceKind.CHECK_IN),
        history=tuple(ordered),
    )
