"""Display status of appointments, always derived from persisted status and the clock."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable

from salon_booking.scheduling.types import Appointment, AppointmentStatus


class DisplayStatus(str, Enum):
    CANCELLED = "cancelled"
    IN_SERVICE = "in_service"
    FINISHED = "finished"
    CONFIRMED = "confirmed"
    PENDING = "pending"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


def resolve(appointment: Appointment, now: datetime) -> DisplayStatus:
    status = AppointmentStatus.coerce(appointment.status)
    if status is AppointmentStatus.CANCELLED:
        return DisplayStatus.CANCELLED

    start, end = appointment.starts_at, appointment.ends_at
    if start is not None:
        if status is AppointmentStatus.CONFIRMED and start <= now < end:
            return DisplayStatus.IN_SERVICE
        if now >= end:
            return DisplayStatus.FINISHED

    if status is AppointmentStatus.CONFIRMED:
        return DisplayStatus.CONFIRMED
    return DisplayStatus.PENDING


display_status = resolve


def _start_key(appointment: Appointment):
    return appointment.starts_at or datetime.min


def upcoming_today(appointments: Iterable[Appointment], now: datetime) -> list[Appointment]:
    """Today's live appointments that have not ended yet, earliest first."""
    today = now.date()
    result = [
        appointment for appointment in appointments
        if not appointment.is_cancelled
        and appointment.starts_at is not None
        and appointment.starts_at.date() == today
        and now < appointment.ends_at
    ]
    return sorted(result, key=_start_key)


def history(appointments: Iterable[Appointment], now: datetime, limit: int = 10) -> list[Appointment]:
    """Cancelled or already-ended appointments, most recent first."""
    result = [
        appointment for appointment in appointments
        if appointment.is_cancelled
        or (appointment.ends_at is not None and now >= appointment.ends_at)
    ]
    return sorted(result, key=_start_key, reverse=True)[:limit]
