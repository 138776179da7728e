from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable

from salon_booking.scheduling.types import Appointment, minute_of_day


@dataclass(frozen=True)
class SlotCandidate:
    professional_id: int
    date: date
    start_time: time
    duration_minutes: int

    @property
    def start_minute(self) -> int:
        return minute_of_day(self.start_time)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap on minute-of-day integers."""
    return start_a < end_b and end_a > start_b


def _calendar_day(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def _same_professional(left, right) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)


def conflicting(candidate: SlotCandidate, existing: Iterable[Appointment]) -> Appointment | None:
    """First non-cancelled appointment of the same professional and day that overlaps."""
    for appointment in existing:
        if appointment.is_cancelled:
            continue
        if not _same_professional(appointment.professional_id, candidate.professional_id):
            continue
        if _calendar_day(appointment.date) != _calendar_day(candidate.date) or appointment.start_time is None:
            continue
        start = minute_of_day(appointment.start_time)
        end = start + appointment.effective_duration
        if overlaps(candidate.start_minute, candidate.end_minute, start, end):
            return appointment
    return None


def is_occupied(candidate: SlotCandidate, existing: Iterable[Appointment]) -> bool:
    return conflicting(candidate, existing) is not None
