"""Tests for the weekly working-hours calendar."""

from datetime import date, time

import pytest

from salon_booking.scheduling.calendar import (
    DEFAULT_SCHEDULE,
    TimeWindow,
    WeekDaySchedule,
    Weekday,
    WorkingHoursCalendar,
    parse_time_of_day,
)

from conftest import MONDAY, SUNDAY


class TestWeekday:
    @pytest.mark.parametrize("value, expected", [
        (0, Weekday.MONDAY),
        ("6", Weekday.SUNDAY),
        ("Tuesday", Weekday.TUESDAY),
        ("wed", Weekday.WEDNESDAY),
        ("sábado", Weekday.SATURDAY),
        ("miercoles", Weekday.WEDNESDAY),
    ])
    def test_parse_accepts_indexes_and_names(self, value, expected):
        assert Weekday.parse(value) is expected

    @pytest.mark.parametrize("value", [7, -1, "funday", None, True])
    def test_parse_rejects_unknown(self, value):
        assert Weekday.parse(value) is None

    def test_indexes_follow_date_weekday(self):
        assert Weekday(MONDAY.weekday()) is Weekday.MONDAY
        assert Weekday(SUNDAY.weekday()) is Weekday.SUNDAY


class TestParseTimeOfDay:
    def test_reads_hh_mm(self):
        assert parse_time_of_day("09:30") == time(9, 30)

    def test_ignores_seconds(self):
        assert parse_time_of_day("18:45:10") == time(18, 45)
        assert parse_time_of_day(time(8, 15, 30)) == time(8, 15)

    @pytest.mark.parametrize("value", ["", "25:00", "nine", None, 930])
    def test_unusable_values_are_none(self, value):
        assert parse_time_of_day(value) is None


class TestWeekDaySchedule:
    def test_disabled_day_has_no_window(self):
        entry = WeekDaySchedule(Weekday.SUNDAY, False, time(9), time(14))
        assert entry.window is None

    def test_inverted_times_are_closed(self):
        entry = WeekDaySchedule(Weekday.MONDAY, True, time(19), time(9))
        assert entry.window is None

    def test_missing_times_are_closed(self):
        entry = WeekDaySchedule(Weekday.MONDAY, True, None, time(19))
        assert entry.window is None

    def test_round_trip_through_dict(self):
        entry = WeekDaySchedule(Weekday.FRIDAY, True, time(10), time(18, 30))
        data = entry.to_dict()
        assert data == {
            "day": "friday",
            "day_of_week": 4,
            "enabled": True,
            "start": "10:00",
            "end": "18:30",
        }
        assert WeekDaySchedule.from_dict(data) == entry

    def test_null_day_falls_back_to_index(self):
        entry = WeekDaySchedule.from_dict({"day": None, "day_of_week": 2, "enabled": True, "start": "09:00", "end": "13:00"})
        assert entry.day is Weekday.WEDNESDAY

    def test_unidentifiable_day(self):
        assert WeekDaySchedule.from_dict({"day": None, "enabled": True}) is None


class TestTimeWindow:
    def test_contains_is_inclusive_at_both_edges(self):
        window = TimeWindow(time(9), time(19))
        assert window.contains(9 * 60, 10 * 60)
        assert window.contains(18 * 60, 19 * 60)
        assert not window.contains(18 * 60 + 30, 19 * 60 + 30)
        assert not window.contains(8 * 60 + 30, 9 * 60 + 30)


class TestWorkingHoursCalendar:
    def test_default_schedule(self):
        assert DEFAULT_SCHEDULE.window_for(MONDAY) == TimeWindow(time(9), time(19))
        assert DEFAULT_SCHEDULE.window_for(date(2025, 6, 7)) == TimeWindow(time(9), time(17))
        assert DEFAULT_SCHEDULE.window_for(SUNDAY) is None

    def test_missing_day_is_closed(self):
        calendar = WorkingHoursCalendar([WeekDaySchedule(Weekday.MONDAY, True, time(9), time(12))])
        assert calendar.is_open(MONDAY)
        assert not calendar.is_open(date(2025, 6, 3))

    def test_duplicate_days_rejected(self):
        entry = WeekDaySchedule(Weekday.MONDAY, True, time(9), time(12))
        with pytest.raises(ValueError):
            WorkingHoursCalendar([entry, entry])

    def test_entries_always_cover_the_week(self):
        calendar = WorkingHoursCalendar([WeekDaySchedule(Weekday.WEDNESDAY, True, time(9), time(12))])
        entries = calendar.entries()
        assert [entry.day for entry in entries] == list(Weekday)
        assert [entry.enabled for entry in entries].count(True) == 1

    def test_from_records_skips_bad_rows(self):
        calendar = WorkingHoursCalendar.from_records([
            {"day": "lunes", "enabled": True, "start": "10:00", "end": "16:00"},
            {"day": "monday", "enabled": True, "start": "08:00", "end": "20:00"},
            {"day": "someday", "enabled": True, "start": "08:00", "end": "20:00"},
            "not a record",
        ])
        assert calendar.window_for(MONDAY) == TimeWindow(time(10), time(16))
        assert calendar.is_open(MONDAY)
        assert not calendar.is_open(SUNDAY)

    def test_from_records_accepts_none(self):
        assert WorkingHoursCalendar.from_records(None).to_records()[0]["enabled"] is False

    def test_equality_compares_the_week(self):
        rebuilt = WorkingHoursCalendar.from_records(DEFAULT_SCHEDULE.to_records())
        assert rebuilt == DEFAULT_SCHEDULE
