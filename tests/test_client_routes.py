"""Tests for the client booking endpoints."""

from datetime import time
from unittest.mock import patch

from salon_booking.models.appointment import Appointment
from salon_booking.models.audit import AuditLog
from salon_booking.repository import SqlAppointmentStore, SqlServiceCatalog
from salon_booking.scheduling.ports import StorageError

from conftest import TUESDAY, add_appointment_row


def _book(client, professional, start='10:00', on='2025-06-03', service='Manicure semipermanente', **extra):
    payload = {
        'professional_id': professional.id,
        'service': service,
        'appointment_date': on,
        'start_time': start,
    }
    payload.update(extra)
    return client.post('/client/book', json=payload)


class TestAvailableDays:
    def test_lists_open_days_in_horizon(self, client_session, users):
        response = client_session.get(f"/client/available-days?professional_id={users['professional'].id}")
        assert response.status_code == 200
        days = response.get_json()['days']
        assert days[0] == '2025-06-02'
        assert '2025-06-08' not in days
        assert len(days) == 12

    def test_requires_professional(self, client_session):
        assert client_session.get('/client/available-days').status_code == 400

    def test_unknown_professional(self, client_session, users):
        response = client_session.get(f"/client/available-days?professional_id={users['client'].id}")
        assert response.status_code == 404


class TestAvailableTimes:
    def test_slots_include_add_on_duration(self, client_session, users):
        response = client_session.post('/client/available-times', json={
            'professional_id': users['professional'].id,
            'service': 'Manicure semipermanente',
            'add_on': 'feet',
            'appointment_date': '2025-06-03',
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['duration_minutes'] == 150
        assert data['duration_label'] == '2h 30m'
        assert data['price_label'] == '$33.000'
        assert data['add_on_applied'] is True
        times = [slot['time'] for slot in data['available_times']]
        assert times[0] == '09:00'
        assert times[-1] == '16:30'

    def test_occupied_slots_are_flagged(self, client_session, users):
        add_appointment_row(users['client'], users['professional'], TUESDAY, time(10, 0))
        response = client_session.post('/client/available-times', json={
            'professional_id': users['professional'].id,
            'service': 'Corte de pelo',
            'appointment_date': '2025-06-03',
        })
        slots = {slot['time']: slot['occupied'] for slot in response.get_json()['available_times']}
        assert slots['09:00'] is False
        assert slots['09:30'] is True
        assert slots['10:30'] is True
        assert slots['11:00'] is False

    def test_today_only_offers_future_times(self, client_session, users):
        response = client_session.post('/client/available-times', json={
            'professional_id': users['professional'].id,
            'service': 'Corte de pelo',
            'appointment_date': '2025-06-02',
        })
        assert response.get_json()['available_times'][0]['time'] == '10:30'

    def test_closed_day_message(self, client_session, users):
        response = client_session.post('/client/available-times', json={
            'professional_id': users['professional'].id,
            'service': 'Corte de pelo',
            'appointment_date': '2025-06-08',
        })
        data = response.get_json()
        assert data['available_times'] == []
        assert data['message'] == "We're closed on this day"

    def test_unknown_add_on_is_rejected(self, client_session, users):
        response = client_session.post('/client/available-times', json={
            'professional_id': users['professional'].id,
            'service': 'Manicure semipermanente',
            'add_on': 'glitter',
            'appointment_date': '2025-06-03',
        })
        assert response.status_code == 400
        assert 'add_on' in response.get_json()['fields']


class TestBookAppointment:
    def test_books_and_audits(self, client_session, users):
        response = _book(client_session, users['professional'], add_on='semi')
        assert response.status_code == 201
        data = response.get_json()
        appointment = data['appointment']
        assert appointment['status'] == 'pending'
        assert appointment['display_status'] == 'pending'
        assert appointment['duration_minutes'] == 150
        assert appointment['service'] == 'Manicure semipermanente (+Removal semi)'
        assert appointment['client_id'] == users['client'].id
        assert data['calendar_url'].startswith('https://calendar.google.com/calendar/render?')

        entry = AuditLog.query.filter_by(action='create', entity_type='appointment').one()
        assert entry.entity_id == appointment['id']
        assert entry.get_details_dict()['duration_minutes'] == 150

    def test_overlapping_booking_is_conflict(self, client_session, users):
        assert _book(client_session, users['professional'], start='10:00').status_code == 201
        response = _book(client_session, users['professional'], start='11:30')
        assert response.status_code == 409
        data = response.get_json()
        assert data['code'] == 'slot_taken'
        assert data['refresh_slots'] is True
        assert Appointment.query.count() == 1

    def test_back_to_back_is_allowed(self, client_session, users):
        assert _book(client_session, users['professional'], start='10:00').status_code == 201
        assert _book(client_session, users['professional'], start='12:00').status_code == 201

    def test_past_time(self, client_session, users):
        response = _book(client_session, users['professional'], start='09:00', on='2025-06-02')
        assert response.status_code == 422
        assert response.get_json()['code'] == 'past_time'

    def test_outside_business_hours(self, client_session, users):
        response = _book(client_session, users['professional'], start='17:30')
        assert response.status_code == 422
        assert response.get_json()['code'] == 'outside_business_hours'

    def test_closed_day(self, client_session, users):
        response = _book(client_session, users['professional'], on='2025-06-08')
        assert response.get_json()['code'] == 'outside_business_hours'

    def test_unknown_professional(self, client_session, users):
        response = _book(client_session, users['client'])
        assert response.status_code == 404
        assert response.get_json()['code'] == 'no_such_professional'

    def test_missing_start_time(self, client_session, users):
        response = client_session.post('/client/book', json={
            'professional_id': users['professional'].id,
            'service': 'Corte de pelo',
            'appointment_date': '2025-06-03',
        })
        assert response.status_code == 400
        assert 'start_time' in response.get_json()['fields']

    def test_cancelled_slot_can_be_rebooked(self, client_session, users):
        add_appointment_row(users['client'], users['professional'], TUESDAY, time(10, 0), status='cancelled')
        assert _book(client_session, users['professional'], start='10:00').status_code == 201


class TestStorageFailures:
    def test_commit_failure_is_unavailable(self, client_session, users):
        with patch.object(SqlAppointmentStore, 'insert_if_no_conflict', side_effect=StorageError('connection lost')):
            response = _book(client_session, users['professional'])
        assert response.status_code == 503
        assert response.get_json()['code'] == 'storage_unavailable'
        assert Appointment.query.count() == 0

    def test_read_failure_is_unavailable(self, client_session, users):
        with patch.object(SqlAppointmentStore, 'list_for', side_effect=StorageError('read timed out')):
            response = _book(client_session, users['professional'])
        assert response.status_code == 503

    def test_catalog_failure_is_unavailable(self, client_session, users):
        with patch.object(SqlServiceCatalog, 'get', side_effect=StorageError('catalog read timed out')):
            response = _book(client_session, users['professional'])
        assert response.status_code == 503
        assert response.get_json()['code'] == 'storage_unavailable'

    def test_available_times_when_appointments_cannot_be_read(self, client_session, users):
        with patch.object(SqlAppointmentStore, 'list_for', side_effect=StorageError('read timed out')):
            response = client_session.post('/client/available-times', json={
                'professional_id': users['professional'].id,
                'service': 'Corte de pelo',
                'appointment_date': '2025-06-03',
            })
        assert response.status_code == 503
        assert 'error' in response.get_json()

    def test_available_times_when_catalog_cannot_be_read(self, client_session, users):
        with patch.object(SqlServiceCatalog, 'get', side_effect=StorageError('catalog read timed out')):
            response = client_session.post('/client/available-times', json={
                'professional_id': users['professional'].id,
                'service': 'Corte de pelo',
                'appointment_date': '2025-06-03',
            })
        assert response.status_code == 503


class TestClientAppointments:
    def test_lists_own_appointments(self, client_session, users):
        _book(client_session, users['professional'], start='10:00')
        _book(client_session, users['professional'], start='14:00', on='2025-06-04')
        response = client_session.get('/client/appointments')
        dates = [appointment['date'] for appointment in response.get_json()['appointments']]
        assert dates == ['2025-06-04', '2025-06-03']


class TestAccess:
    def test_requires_login(self, client, users):
        response = client.get('/client/appointments')
        assert response.status_code == 401

    def test_professionals_cannot_book(self, professional_session, users):
        response = _book(professional_session, users['professional'])
        assert response.status_code == 403
