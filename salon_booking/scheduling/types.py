from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @classmethod
    def coerce(cls, value) -> "AppointmentStatus":
        """Map a persisted value onto a status; unknown values read as pending."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.PENDING


# Used when a stored appointment carries no usable duration.
DEFAULT_DURATION_MINUTES = 60


def minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def time_from_minutes(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


@dataclass(frozen=True)
class Appointment:
    id: int | None
    professional_id: int | None
    client_id: int | None
    date: date | None
    start_time: time | None
    duration_minutes: int
    service_label: str
    price: Decimal
    status: AppointmentStatus = AppointmentStatus.PENDING

    @property
    def effective_duration(self) -> int:
        if isinstance(self.duration_minutes, int) and self.duration_minutes > 0:
            return self.duration_minutes
        return DEFAULT_DURATION_MINUTES

    @property
    def starts_at(self) -> datetime | None:
        if self.date is None or self.start_time is None:
            return None
        return datetime.combine(self.date, self.start_time)

    @property
    def ends_at(self) -> datetime | None:
        start = self.starts_at
        if start is None:
            return None
        return start + timedelta(minutes=self.effective_duration)

    @property
    def is_cancelled(self) -> bool:
        return AppointmentStatus.coerce(self.status) is AppointmentStatus.CANCELLED
