from salon_booking import db
from salon_booking.scheduling.calendar import (
    DEFAULT_SCHEDULE, WeekDaySchedule, Weekday, WorkingHoursCalendar,
)

# Days of the week constants (0 = Monday, 6 = Sunday)
MONDAY = Weekday.MONDAY.value
TUESDAY = Weekday.TUESDAY.value
WEDNESDAY = Weekday.WEDNESDAY.value
THURSDAY = Weekday.THURSDAY.value
FRIDAY = Weekday.FRIDAY.value
SATURDAY = Weekday.SATURDAY.value
SUNDAY = Weekday.SUNDAY.value


class WorkingHours(db.Model):
    """One weekday of a weekly calendar.

    Rows with no professional form the shared salon calendar; a professional
    with rows of their own uses those instead.
    """
    __tablename__ = 'working_hours'
    __table_args__ = (
        db.UniqueConstraint('professional_id', 'day_of_week', name='uq_working_hours_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    professional_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    day_of_week = db.Column(db.Integer, nullable=False)  # 0-6 (Monday-Sunday)
    enabled = db.Column(db.Boolean, default=True)
    start_time = db.Column(db.Time, nullable=True)
    end_time = db.Column(db.Time, nullable=True)

    def __init__(self, day_of_week, start_time, end_time, enabled=True, professional_id=None):
        self.day_of_week = day_of_week
        self.start_time = start_time
        self.end_time = end_time
        self.enabled = enabled
        self.professional_id = professional_id

    def to_schedule(self):
        """None when the stored day index is out of range."""
        day = Weekday.parse(self.day_of_week)
        if day is None:
            return None
        return WeekDaySchedule(day, bool(self.enabled), self.start_time, self.end_time)

    @classmethod
    def rows_for(cls, professional_id=None):
        return cls.query.filter_by(professional_id=professional_id).order_by(cls.day_of_week).all()

    @classmethod
    def calendar_from_rows(cls, rows):
        """Build a calendar, skipping unreadable or repeated rows."""
        entries = {}
        for row in rows:
            entry = row.to_schedule()
            if entry is not None and entry.day not in entries:
                entries[entry.day] = entry
        return WorkingHoursCalendar(entries.values())

    @classmethod
    def replace_calendar(cls, calendar, professional_id=None):
        """Overwrite the stored week for a professional (or the salon) with ``calendar``."""
        existing = {row.day_of_week: row for row in cls.rows_for(professional_id)}
        for entry in calendar.entries():
            row = existing.get(int(entry.day))
            if row is None:
                row = cls(int(entry.day), entry.start, entry.end, entry.enabled, professional_id)
                db.session.add(row)
            else:
                row.enabled = entry.enabled
                row.start_time = entry.start
                row.end_time = entry.end

    @classmethod
    def ensure_business_hours(cls):
        """Create the shared calendar from the default schedule if it is missing."""
        if cls.rows_for(None):
            return False
        cls.replace_calendar(DEFAULT_SCHEDULE, None)
        return True

    def __repr__(self):
        if not self.enabled:
            return f'<WorkingHours: Day {self.day_of_week} - CLOSED>'
        return f'<WorkingHours: Day {self.day_of_week} - {self.start_time} to {self.end_time}>'
