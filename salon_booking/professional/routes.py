from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from datetime import datetime
from functools import wraps
from salon_booking import db
from salon_booking.models.appointment import Appointment, STATUS_PENDING
from salon_booking.models.availability import WorkingHours
from salon_booking.professional.forms import AppointmentStatusForm
from salon_booking.repository import load_calendar
from salon_booking.scheduling.status import history, upcoming_today
from salon_booking.utils.appointments import change_appointment_status
from salon_booking.utils.audit import log_audit
from salon_booking.utils.schedule import parse_schedule_payload
from salon_booking.wiring import invalidate_calendar, now

professional_bp = Blueprint('professional', __name__, url_prefix='/professional')


# Custom decorator to ensure only professionals can access these routes
def professional_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_professional():
            return jsonify({'error': 'Access denied. This area is for professionals only.'}), 403
        return f(*args, **kwargs)
    return decorated_function


@professional_bp.route('/dashboard')
@login_required
@professional_required
def dashboard():
    """Today's remaining appointments and recent history"""
    current = now()
    rows = Appointment.query.filter_by(professional_id=current_user.id).all()
    by_id = {row.id: row for row in rows}
    records = [row.to_domain() for row in rows]

    return jsonify({
        'today': [by_id[record.id].to_dict(current) for record in upcoming_today(records, current)],
        'history': [by_id[record.id].to_dict(current) for record in history(records, current)],
        'pending_count': sum(1 for row in rows if row.status == STATUS_PENDING)
    })


@professional_bp.route('/appointments')
@login_required
@professional_required
def appointments():
    """The professional's appointments with filtering options"""
    status_filter = request.args.get('status', 'all')
    date_from = request.args.get('date_from', now().strftime('%Y-%m-%d'))

    # Convert date string to date
    try:
        date_from = datetime.strptime(date_from, '%Y-%m-%d').date()
    except ValueError:
        date_from = now().date()

    query = Appointment.query.filter_by(professional_id=current_user.id)
    if status_filter != 'all':
        query = query.filter_by(status=status_filter)
    query = query.filter(Appointment.date >= date_from)

    current = now()
    rows = query.order_by(Appointment.date, Appointment.start_time).all()
    return jsonify({
        'appointments': [row.to_dict(current) for row in rows],
        'status_filter': status_filter,
        'date_from': date_from.isoformat()
    })


@professional_bp.route('/appointments/<int:appointment_id>/status', methods=['POST'])
@login_required
@professional_required
def update_appointment_status(appointment_id):
    """Confirm or cancel one of the professional's appointments"""
    appointment = db.get_or_404(Appointment, appointment_id)

    # Ensure the appointment belongs to this professional
    if appointment.professional_id != current_user.id:
        return jsonify({'error': 'Access denied. You can only update your own appointments.'}), 403

    form = AppointmentStatusForm()
    if not form.validate_on_submit():
        return jsonify({'error': 'Invalid request', 'fields': form.errors}), 400

    changed, message = change_appointment_status(appointment, form.status.data, form.notes.data)
    if not changed:
        return jsonify({'error': message}), 409
    return jsonify({'message': 'Appointment status updated successfully.', 'appointment': appointment.to_dict(now())})


@professional_bp.route('/schedule', methods=['GET'])
@login_required
@professional_required
def schedule():
    """The week the professional is booked against"""
    own_rows = WorkingHours.rows_for(current_user.id)
    return jsonify({
        'uses_business_hours': not own_rows,
        'days': load_calendar(current_user.id).to_records()
    })


@professional_bp.route('/schedule', methods=['PUT'])
@login_required
@professional_required
def update_schedule():
    """Replace the professional's own working hours"""
    calendar, errors = parse_schedule_payload(request.get_json(silent=True))
    if errors:
        return jsonify({'error': 'Invalid working hours', 'fields': errors}), 400

    old_days = load_calendar(current_user.id).to_records()
    WorkingHours.replace_calendar(calendar, current_user.id)
    db.session.commit()
    invalidate_calendar(current_user.id)

    log_audit('update', 'working_hours', entity_id=current_user.id,
              details={'old_days': old_days, 'new_days': calendar.to_records()})
    return jsonify({'message': 'Working hours updated successfully.', 'days': calendar.to_records()})
