from __future__ import annotations

from datetime import date, datetime, time, timedelta

from salon_booking.scheduling.calendar import WorkingHoursCalendar
from salon_booking.scheduling.types import time_from_minutes

SLOT_INTERVAL_MINUTES = 30
DEFAULT_HORIZON_DAYS = 14


def generate(on: date, duration_minutes: int, calendar: WorkingHoursCalendar, now: datetime) -> list[time]:
    """Start times on ``on`` at which a service of ``duration_minutes`` fits.

    Candidates step every 30 minutes from opening; a candidate is kept only
    if the service ends at or before closing. On the current day only
    starts strictly after ``now`` are returned.
    """
    window = calendar.window_for(on)
    if window is None or duration_minutes <= 0:
        return []

    slots = []
    current = window.start_minute
    while current + duration_minutes <= window.end_minute:
        slots.append(time_from_minutes(current))
        current += SLOT_INTERVAL_MINUTES

    if on == now.date():
        slots = [slot for slot in slots if datetime.combine(on, slot) > now]
    return slots


# Public name used by the booking screens.
list_bookable_slots = generate


def list_bookable_days(calendar: WorkingHoursCalendar, now: datetime, horizon_days: int = DEFAULT_HORIZON_DAYS) -> list[date]:
    """Open days from today through ``horizon_days - 1`` days ahead."""
    today = now.date()
    days = []
    for offset in range(max(horizon_days, 0)):
        candidate = today + timedelta(days=offset)
        if calendar.is_open(candidate):
            days.append(candidate)
    return days
