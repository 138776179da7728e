from salon_booking.scheduling.calendar import (
    WeekDaySchedule, Weekday, WorkingHoursCalendar, parse_time_of_day,
)


def parse_schedule_payload(payload):
    """
    Validate a submitted week of working hours.

    Expects {"days": [{"day": "monday", "enabled": true, "start": "09:00", "end": "19:00"}, ...]}.
    Unlike calendars read back from storage, submitted entries are checked
    strictly. Returns (calendar, errors); calendar is None when errors is non-empty.
    """
    days = payload.get('days') if isinstance(payload, dict) else None
    if not isinstance(days, list) or not days:
        return None, {'days': ['A list of days is required.']}

    errors = {}
    entries = {}
    for index, record in enumerate(days):
        if not isinstance(record, dict):
            errors[str(index)] = ['Each day must be an object.']
            continue
        raw_day = record.get('day')
        if raw_day is None:
            raw_day = record.get('day_of_week')
        day = Weekday.parse(raw_day)
        if day is None:
            errors[str(index)] = ['Unknown day.']
            continue
        key = day.name.lower()
        if day in entries:
            errors[key] = ['Day listed more than once.']
            continue

        enabled = bool(record.get('enabled', False))
        start = parse_time_of_day(record.get('start'))
        end = parse_time_of_day(record.get('end'))
        if enabled:
            if start is None or end is None:
                errors[key] = ['Invalid time format. Use HH:MM.']
                continue
            if start >= end:
                errors[key] = ['Opening time must be before closing time.']
                continue
        entries[day] = WeekDaySchedule(day, enabled, start, end)

    if errors:
        return None, errors
    return WorkingHoursCalendar(entries.values()), {}
