from salon_booking import db
from salon_booking.scheduling.types import Appointment as AppointmentRecord, AppointmentStatus
from salon_booking.scheduling.status import resolve
from salon_booking.scheduling.legacy import format_duration, format_price
from datetime import datetime
from decimal import Decimal

# Appointment status constants
STATUS_PENDING = AppointmentStatus.PENDING.value
STATUS_CONFIRMED = AppointmentStatus.CONFIRMED.value
STATUS_CANCELLED = AppointmentStatus.CANCELLED.value

# Allowed manual transitions; cancelled is terminal
TRANSITIONS = {
    STATUS_PENDING: {STATUS_CONFIRMED, STATUS_CANCELLED},
    STATUS_CONFIRMED: {STATUS_CANCELLED},
    STATUS_CANCELLED: set(),
}


class Appointment(db.Model):
    __tablename__ = 'appointments'
    __table_args__ = (
        db.Index('ix_appointments_professional_date', 'professional_id', 'date'),
    )

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    professional_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.Time, nullable=False)
    duration_minutes = db.Column(db.Integer, nullable=False)
    service_label = db.Column(db.String(150), nullable=False)
    price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    status = db.Column(db.String(20), default=STATUS_PENDING)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __init__(self, client_id, professional_id, date, start_time, duration_minutes,
                 service_label, price, status=STATUS_PENDING, notes=None):
        self.client_id = client_id
        self.professional_id = professional_id
        self.date = date
        self.start_time = start_time
        self.duration_minutes = duration_minutes
        self.service_label = service_label
        self.price = price
        self.status = status
        self.notes = notes

    @classmethod
    def from_record(cls, record, notes=None):
        return cls(
            client_id=record.client_id,
            professional_id=record.professional_id,
            date=record.date,
            start_time=record.start_time,
            duration_minutes=record.duration_minutes,
            service_label=record.service_label,
            price=record.price,
            status=AppointmentStatus.coerce(record.status).value,
            notes=notes,
        )

    def to_domain(self):
        return AppointmentRecord(
            id=self.id,
            professional_id=self.professional_id,
            client_id=self.client_id,
            date=self.date,
            start_time=self.start_time,
            duration_minutes=self.duration_minutes,
            service_label=self.service_label,
            price=Decimal(self.price if self.price is not None else 0),
            status=AppointmentStatus.coerce(self.status),
        )

    def can_transition_to(self, status):
        return status in TRANSITIONS.get(self.status, set())

    def confirm(self):
        self.status = STATUS_CONFIRMED

    def cancel(self):
        self.status = STATUS_CANCELLED

    def to_dict(self, now):
        return {
            'id': self.id,
            'client_id': self.client_id,
            'professional_id': self.professional_id,
            'date': self.date.isoformat(),
            'start_time': self.start_time.strftime('%H:%M'),
            'duration_minutes': self.duration_minutes,
            'duration_label': format_duration(self.duration_minutes),
            'service': self.service_label,
            'price': str(self.price),
            'price_label': format_price(self.price),
            'status': self.status,
            'display_status': resolve(self.to_domain(), now).value,
            'notes': self.notes,
        }

    def __repr__(self):
        return f'<Appointment {self.id}: {self.date} {self.start_time} ({self.duration_minutes} min)>'
