"""Tests for start-time and open-day generation."""

from datetime import date, datetime, time

from salon_booking.scheduling.calendar import WeekDaySchedule, Weekday, WorkingHoursCalendar
from salon_booking.scheduling.slots import generate, list_bookable_days, list_bookable_slots

from conftest import FIXED_NOW, MONDAY, SUNDAY, TUESDAY


class TestGenerate:
    def test_last_slot_ends_at_closing(self, default_calendar):
        # 150 minutes inside 09:00-19:00: the last start is 16:30
        slots = generate(TUESDAY, 150, default_calendar, FIXED_NOW)
        assert slots[0] == time(9, 0)
        assert slots[-1] == time(16, 30)
        assert time(17, 0) not in slots

    def test_two_hour_service_in_nine_to_six_day(self):
        calendar = WorkingHoursCalendar([WeekDaySchedule(Weekday.TUESDAY, True, time(9), time(18))])
        slots = generate(TUESDAY, 120, calendar, FIXED_NOW)
        assert slots[-1] == time(16, 0)
        assert time(16, 30) not in slots

    def test_three_hour_service(self, default_calendar):
        slots = generate(TUESDAY, 180, default_calendar, FIXED_NOW)
        assert slots[-1] == time(16, 0)
        assert time(16, 30) not in slots

    def test_steps_every_thirty_minutes(self, default_calendar):
        slots = generate(TUESDAY, 60, default_calendar, FIXED_NOW)
        assert len(slots) == 19
        assert slots[:3] == [time(9, 0), time(9, 30), time(10, 0)]

    def test_today_only_keeps_future_starts(self, default_calendar):
        now = datetime(2025, 6, 2, 14, 5)
        slots = generate(MONDAY, 60, default_calendar, now)
        assert time(14, 0) not in slots
        assert slots[0] == time(14, 30)

    def test_start_equal_to_now_is_excluded(self, default_calendar):
        now = datetime(2025, 6, 2, 14, 30)
        assert generate(MONDAY, 60, default_calendar, now)[0] == time(15, 0)

    def test_closed_day_is_empty(self, default_calendar):
        assert generate(SUNDAY, 60, default_calendar, FIXED_NOW) == []

    def test_service_longer_than_the_day(self):
        calendar = WorkingHoursCalendar([WeekDaySchedule(Weekday.TUESDAY, True, time(9), time(10))])
        assert generate(TUESDAY, 90, calendar, FIXED_NOW) == []

    def test_alias(self):
        assert list_bookable_slots is generate


class TestBookableDays:
    def test_skips_closed_days(self, default_calendar):
        days = list_bookable_days(default_calendar, FIXED_NOW, 14)
        assert days[0] == MONDAY
        assert SUNDAY not in days
        assert len(days) == 12

    def test_horizon_is_exclusive(self, default_calendar):
        days = list_bookable_days(default_calendar, FIXED_NOW, 7)
        assert days[-1] == date(2025, 6, 7)

    def test_zero_horizon(self, default_calendar):
        assert list_bookable_days(default_calendar, FIXED_NOW, 0) == []
