from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from functools import wraps
from salon_booking import db
from salon_booking.models.appointment import Appointment
from salon_booking.client.forms import AvailableTimesForm, AppointmentForm
from salon_booking.repository import SqlAppointmentStore
from salon_booking.scheduling.booking import BookingError, BookingRequest
from salon_booking.scheduling.conflicts import SlotCandidate, is_occupied
from salon_booking.scheduling.ports import StorageError
from salon_booking.scheduling.legacy import format_duration, format_price, google_calendar_url
from salon_booking.scheduling.slots import list_bookable_days, list_bookable_slots
from salon_booking.utils.audit import log_audit
from salon_booking.wiring import get_directory, get_orchestrator, now

client_bp = Blueprint('client', __name__, url_prefix='/client')

BOOKING_ERROR_STATUS = {
    BookingError.INVALID_REQUEST: 400,
    BookingError.NO_SUCH_PROFESSIONAL: 404,
    BookingError.PAST_TIME: 422,
    BookingError.OUTSIDE_BUSINESS_HOURS: 422,
    BookingError.SLOT_TAKEN: 409,
    BookingError.STORAGE_UNAVAILABLE: 503,
}


# Custom decorator to ensure only clients can access these routes
def client_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_client():
            return jsonify({'error': 'Access denied. This area is for clients only.'}), 403
        return f(*args, **kwargs)
    return decorated_function


@client_bp.route('/appointments')
@login_required
@client_required
def appointments():
    """All of the client's appointments with their live status"""
    current = now()
    all_appointments = Appointment.query.filter_by(
        client_id=current_user.id
    ).order_by(Appointment.date.desc(), Appointment.start_time.desc()).all()
    return jsonify({'appointments': [appointment.to_dict(current) for appointment in all_appointments]})


@client_bp.route('/available-days')
@login_required
@client_required
def available_days():
    """Open days within the booking horizon for a professional"""
    professional_id = request.args.get('professional_id', type=int)
    if professional_id is None:
        return jsonify({'error': 'Please select a professional'}), 400

    professional = get_directory().get(professional_id)
    if professional is None:
        return jsonify({'error': 'Selected professional not found'}), 404

    days = list_bookable_days(professional.calendar, now(), current_app.config['BOOKING_HORIZON_DAYS'])
    return jsonify({'professional_id': professional_id, 'days': [day.isoformat() for day in days]})


@client_bp.route('/available-times', methods=['POST'])
@login_required
@client_required
def get_available_times():
    """Candidate start times for a service, each flagged if already taken"""
    form = AvailableTimesForm()
    if not form.validate_on_submit():
        return jsonify({'error': 'Please select a professional, service, and date', 'fields': form.errors}), 400

    professional = get_directory().get(form.professional_id.data)
    if professional is None:
        return jsonify({'error': 'Selected professional not found'}), 404

    selected_date = form.appointment_date.data
    try:
        quote = get_orchestrator().quote(form.service.data, form.add_on.data)
        existing = SqlAppointmentStore().list_for(professional.professional_id, selected_date)
    except StorageError as e:
        current_app.logger.error(f"Could not load service or appointments for available times: {e}")
        return jsonify({'error': 'Available times are temporarily unavailable. Please try again.'}), 503

    slots = list_bookable_slots(selected_date, quote.duration_minutes, professional.calendar, now())
    available_times = []
    for slot in slots:
        candidate = SlotCandidate(professional.professional_id, selected_date, slot, quote.duration_minutes)
        available_times.append({
            'time': slot.strftime('%H:%M'),
            'occupied': is_occupied(candidate, existing)
        })

    payload = {
        'date': selected_date.isoformat(),
        'duration_minutes': quote.duration_minutes,
        'duration_label': format_duration(quote.duration_minutes),
        'price': str(quote.price),
        'price_label': format_price(quote.price),
        'add_on_applied': quote.add_on_applied,
        'available_times': available_times
    }
    if not professional.calendar.is_open(selected_date):
        payload['message'] = "We're closed on this day"
    return jsonify(payload)


@client_bp.route('/book', methods=['POST'])
@login_required
@client_required
def book_appointment():
    """Book a new appointment"""
    form = AppointmentForm()
    if not form.validate_on_submit():
        return jsonify({'error': 'Invalid request', 'fields': form.errors}), 400

    booking_request = BookingRequest(
        professional_id=form.professional_id.data,
        service_label=form.service.data,
        date=form.appointment_date.data,
        start_time=form.start_time.data,
        client_id=current_user.id,
        add_on=form.add_on.data or None
    )
    result = get_orchestrator().attempt_booking(booking_request)

    if not result.ok:
        body = {'error': result.message, 'code': result.error.value}
        if result.error is BookingError.SLOT_TAKEN:
            body['refresh_slots'] = True
        return jsonify(body), BOOKING_ERROR_STATUS[result.error]

    appointment = db.session.get(Appointment, result.appointment.id)

    # Log the appointment booking action
    audit_details = {
        'service': appointment.service_label,
        'professional_id': appointment.professional_id,
        'appointment_time': f"{appointment.date.isoformat()} {appointment.start_time.strftime('%H:%M')}",
        'duration_minutes': appointment.duration_minutes,
        'price': appointment.price
    }
    if not log_audit('create', 'appointment', entity_id=appointment.id, details=audit_details):
        current_app.logger.error(f"Failed to create audit log for appointment {appointment.id}")

    professional = appointment.professional
    return jsonify({
        'message': 'Appointment booked successfully!',
        'appointment': appointment.to_dict(now()),
        'calendar_url': google_calendar_url(
            result.appointment,
            professional_name=professional.get_full_name() if professional else None,
            client_name=current_user.get_full_name()
        )
    }), 201
