"""Weekly working-hours calendar.

Days are indexed with ``date.weekday()`` (Monday = 0, Sunday = 6). A day with
no entry, a disabled entry, or an entry whose times are missing or inverted
is closed; looking it up never raises.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import IntEnum
from typing import Iterable, Mapping

from salon_booking.scheduling.types import minute_of_day

logger = logging.getLogger(__name__)


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value) -> "Weekday | None":
        """Accept an index, an English name or abbreviation, or a Spanish name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value) if 0 <= value <= 6 else None
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        if key.isdigit():
            return cls.parse(int(key))
        return _WEEKDAY_ALIASES.get(key)


_WEEKDAY_ALIASES = {}
for _day in Weekday:
    _WEEKDAY_ALIASES[_day.name.lower()] = _day
    _WEEKDAY_ALIASES[_day.name.lower()[:3]] = _day
_WEEKDAY_ALIASES.update({
    "lunes": Weekday.MONDAY,
    "martes": Weekday.TUESDAY,
    "miércoles": Weekday.WEDNESDAY,
    "miercoles": Weekday.WEDNESDAY,
    "jueves": Weekday.THURSDAY,
    "viernes": Weekday.FRIDAY,
    "sábado": Weekday.SATURDAY,
    "sabado": Weekday.SATURDAY,
    "domingo": Weekday.SUNDAY,
})


def parse_time_of_day(value) -> time | None:
    """Parse ``HH:MM`` (or pass a ``time`` through). Returns None when unusable."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip()[:5], "%H:%M").time()
    except ValueError:
        return None


@dataclass(frozen=True)
class TimeWindow:
    start: time
    end: time

    @property
    def start_minute(self) -> int:
        return minute_of_day(self.start)

    @property
    def end_minute(self) -> int:
        return minute_of_day(self.end)

    def contains(self, start_minute: int, end_minute: int) -> bool:
        return self.start_minute <= start_minute and end_minute <= self.end_minute


@dataclass(frozen=True)
class WeekDaySchedule:
    day: Weekday
    enabled: bool
    start: time | None
    end: time | None

    @property
    def window(self) -> TimeWindow | None:
        if not self.enabled:
            return None
        if self.start is None or self.end is None or self.start >= self.end:
            logger.debug("Treating malformed schedule entry for %s as closed", self.day.label)
            return None
        return TimeWindow(self.start, self.end)

    def to_dict(self) -> dict:
        return {
            "day": self.day.name.lower(),
            "day_of_week": int(self.day),
            "enabled": self.enabled,
            "start": self.start.strftime("%H:%M") if self.start else None,
            "end": self.end.strftime("%H:%M") if self.end else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "WeekDaySchedule | None":
        """Build an entry from a raw record; None when the day cannot be identified."""
        raw_day = data.get("day")
        if raw_day is None:
            raw_day = data.get("day_of_week")
        day = Weekday.parse(raw_day)
        if day is None:
            return None
        return cls(
            day=day,
            enabled=bool(data.get("enabled", False)),
            start=parse_time_of_day(data.get("start")),
            end=parse_time_of_day(data.get("end")),
        )


class WorkingHoursCalendar:
    """Seven-day table of open windows."""

    def __init__(self, days: Iterable[WeekDaySchedule] = ()):
        self._days: dict[Weekday, WeekDaySchedule] = {}
        for entry in days:
            if entry.day in self._days:
                raise ValueError(f"Duplicate schedule entry for {entry.day.label}")
            self._days[entry.day] = entry

    @classmethod
    def from_records(cls, records: Iterable[Mapping] | None) -> "WorkingHoursCalendar":
        """Load raw records leniently: unreadable or repeated days are skipped."""
        entries = {}
        for record in records or ():
            if not isinstance(record, Mapping):
                logger.warning("Skipping schedule record of type %s", type(record).__name__)
                continue
            entry = WeekDaySchedule.from_dict(record)
            if entry is None:
                logger.warning("Skipping schedule record with unknown day: %r", record)
                continue
            if entry.day in entries:
                logger.warning("Ignoring repeated schedule record for %s", entry.day.label)
                continue
            entries[entry.day] = entry
        return cls(entries.values())

    def window_for(self, on: date) -> TimeWindow | None:
        entry = self._days.get(Weekday(on.weekday()))
        if entry is None:
            return None
        return entry.window

    def is_open(self, on: date) -> bool:
        return self.window_for(on) is not None

    def entries(self) -> list[WeekDaySchedule]:
        """All seven days in weekday order; missing days appear disabled."""
        return [
            self._days.get(day) or WeekDaySchedule(day, False, None, None)
            for day in Weekday
        ]

    def to_records(self) -> list[dict]:
        return [entry.to_dict() for entry in self.entries()]

    def __eq__(self, other):
        if not isinstance(other, WorkingHoursCalendar):
            return NotImplemented
        return self.entries() == other.entries()

    def __repr__(self):
        open_days = [entry.day.label[:3] for entry in self.entries() if entry.window]
        return f"<WorkingHoursCalendar open={','.join(open_days) or 'none'}>"


DEFAULT_SCHEDULE = WorkingHoursCalendar([
    WeekDaySchedule(Weekday.MONDAY, True, time(9, 0), time(19, 0)),
    WeekDaySchedule(Weekday.TUESDAY, True, time(9, 0), time(19, 0)),
    WeekDaySchedule(Weekday.WEDNESDAY, True, time(9, 0), time(19, 0)),
    WeekDaySchedule(Weekday.THURSDAY, True, time(9, 0), time(19, 0)),
    WeekDaySchedule(Weekday.FRIDAY, True, time(9, 0), time(19, 0)),
    WeekDaySchedule(Weekday.SATURDAY, True, time(9, 0), time(17, 0)),
    WeekDaySchedule(Weekday.SUNDAY, False, time(9, 0), time(14, 0)),
])
