"""Pytest configuration and fixtures."""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from salon_booking import create_app, db
from salon_booking.models.appointment import Appointment as AppointmentRow
from salon_booking.models.service import Service
from salon_booking.models.user import User, ROLE_ADMIN, ROLE_CLIENT, ROLE_PROFESSIONAL
from salon_booking.scheduling.calendar import DEFAULT_SCHEDULE
from salon_booking.scheduling.pricing import ServiceDefinition
from salon_booking.scheduling.types import Appointment, AppointmentStatus

# Monday 2 June 2025, 10:05
FIXED_NOW = datetime(2025, 6, 2, 10, 5)
MONDAY = date(2025, 6, 2)
TUESDAY = date(2025, 6, 3)
SUNDAY = date(2025, 6, 8)

PASSWORD = 'secret123'


def make_appointment(
    start: time,
    minutes: int = 60,
    on: date = TUESDAY,
    professional_id=1,
    status: AppointmentStatus = AppointmentStatus.PENDING,
    appointment_id=None,
) -> Appointment:
    return Appointment(
        id=appointment_id,
        professional_id=professional_id,
        client_id=10,
        date=on,
        start_time=start,
        duration_minutes=minutes,
        service_label='Corte de pelo',
        price=Decimal('15000'),
        status=status,
    )


# ------------------------------------------------------------ domain fixtures

@pytest.fixture
def default_calendar():
    return DEFAULT_SCHEDULE


@pytest.fixture
def manicure():
    return ServiceDefinition('Manicure semipermanente', 120, Decimal('25000'), 'nails')


@pytest.fixture
def massage():
    return ServiceDefinition('Masaje relajante', 60, Decimal('30000'), 'massage')


# --------------------------------------------------------------- app fixtures

@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'WTF_CSRF_ENABLED': False,
        'SECRET_KEY': 'test-key',
        'SCHEDULING_CLOCK': lambda: FIXED_NOW,
        'LOG_LEVEL': 'DEBUG',
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    manicure = Service('Manicure semipermanente', Decimal('25000'), 120, category='nails')
    haircut = Service('Corte de pelo', Decimal('15000'), 45, category='hair')
    massage = Service('Masaje relajante', Decimal('30000'), 60, category='massage')
    db.session.add_all([manicure, haircut, massage])
    db.session.commit()
    return {'manicure': manicure, 'haircut': haircut, 'massage': massage}


@pytest.fixture
def users(app, services):
    customer = User('client@example.com', 'Camila', 'Soto', PASSWORD, role=ROLE_CLIENT)
    professional = User('pro@example.com', 'Valentina', 'Rojas', PASSWORD, role=ROLE_PROFESSIONAL)
    other_professional = User('pro2@example.com', 'Ignacio', 'Pérez', PASSWORD, role=ROLE_PROFESSIONAL)
    admin = User('admin@example.com', 'Salon', 'Admin', PASSWORD, role=ROLE_ADMIN)
    professional.specialties = [services['manicure'], services['haircut']]
    other_professional.specialties = [services['massage']]
    db.session.add_all([customer, professional, other_professional, admin])
    db.session.commit()
    return {
        'client': customer,
        'professional': professional,
        'other_professional': other_professional,
        'admin': admin,
    }


def add_appointment_row(client_user, professional, on, start, minutes=60, status='pending'):
    row = AppointmentRow(
        client_id=client_user.id,
        professional_id=professional.id,
        date=on,
        start_time=start,
        duration_minutes=minutes,
        service_label='Corte de pelo',
        price=Decimal('15000'),
        status=status,
    )
    db.session.add(row)
    db.session.commit()
    return row


def login(client, user):
    response = client.post('/auth/login', json={'email': user.email, 'password': PASSWORD})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def client_session(client, users):
    login(client, users['client'])
    return client


@pytest.fixture
def professional_session(client, users):
    login(client, users['professional'])
    return client


@pytest.fixture
def admin_session(client, users):
    login(client, users['admin'])
    return client
