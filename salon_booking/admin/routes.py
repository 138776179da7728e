from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from datetime import datetime, timedelta
from functools import wraps
from salon_booking import db
from salon_booking.models.appointment import Appointment
from salon_booking.models.audit import AuditLog
from salon_booking.models.availability import WorkingHours
from salon_booking.models.service import Service
from salon_booking.admin.forms import ServiceForm
from salon_booking.professional.forms import AppointmentStatusForm
from salon_booking.utils.appointments import change_appointment_status
from salon_booking.utils.audit import log_audit
from salon_booking.utils.schedule import parse_schedule_payload
from salon_booking.wiring import invalidate_calendar, now

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


# Custom decorator to ensure only admins can access these routes
def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_admin():
            return jsonify({'error': 'Access denied. This area is for administrators only.'}), 403
        return f(*args, **kwargs)
    return decorated_function


@admin_bp.route('/business-hours', methods=['GET', 'PUT'])
@login_required
@admin_required
def business_hours():
    """Manage the salon's shared working hours"""
    # Create default business hours if they don't exist
    if WorkingHours.ensure_business_hours():
        db.session.commit()

    old_calendar = WorkingHours.calendar_from_rows(WorkingHours.rows_for(None))
    if request.method == 'GET':
        return jsonify({'days': old_calendar.to_records()})

    calendar, errors = parse_schedule_payload(request.get_json(silent=True))
    if errors:
        return jsonify({'error': 'Invalid working hours', 'fields': errors}), 400

    WorkingHours.replace_calendar(calendar, None)
    db.session.commit()
    invalidate_calendar()

    # Log the business hours update if changes were made
    if calendar != old_calendar:
        audit_details = {
            'old_hours': old_calendar.to_records(),
            'new_hours': calendar.to_records()
        }
        log_audit('update', 'business_hours', entity_id=None, details=audit_details)

    return jsonify({'message': 'Business hours updated successfully.', 'days': calendar.to_records()})


@admin_bp.route('/services', methods=['GET'])
@login_required
@admin_required
def services():
    """List all salon services"""
    services_list = Service.query.order_by(Service.name).all()
    return jsonify({'services': [service.to_dict() for service in services_list]})


@admin_bp.route('/services', methods=['POST'])
@login_required
@admin_required
def create_service():
    """Create a new salon service"""
    form = ServiceForm()
    if not form.validate_on_submit():
        return jsonify({'error': 'Invalid request', 'fields': form.errors}), 400

    service = Service(
        name=form.name.data,
        category=form.category.data.strip().lower(),
        description=form.description.data,
        price=form.price.data,
        duration_minutes=form.duration_minutes()
    )
    db.session.add(service)
    db.session.commit()

    # Log service creation
    audit_details = {
        'name': service.name,
        'category': service.category,
        'price': service.price,
        'duration_minutes': service.duration_minutes
    }
    log_audit('create', 'service', entity_id=service.id, details=audit_details)

    return jsonify({'message': f'Service {service.name} created successfully.', 'service': service.to_dict()}), 201


@admin_bp.route('/appointments')
@login_required
@admin_required
def appointments():
    """View all salon appointments"""
    status_filter = request.args.get('status', 'all')
    date_from = request.args.get('date_from', now().strftime('%Y-%m-%d'))

    try:
        date_from = datetime.strptime(date_from, '%Y-%m-%d').date()
    except ValueError:
        date_from = now().date()

    query = Appointment.query
    if status_filter != 'all':
        query = query.filter_by(status=status_filter)
    query = query.filter(Appointment.date >= date_from)

    current = now()
    appointments_list = query.order_by(Appointment.date, Appointment.start_time).all()
    return jsonify({
        'appointments': [appointment.to_dict(current) for appointment in appointments_list],
        'status_filter': status_filter,
        'date_from': date_from.isoformat()
    })


@admin_bp.route('/appointments/<int:appointment_id>/status', methods=['POST'])
@login_required
@admin_required
def update_appointment_status(appointment_id):
    """Confirm or cancel any appointment"""
    appointment = db.get_or_404(Appointment, appointment_id)
    form = AppointmentStatusForm()
    if not form.validate_on_submit():
        return jsonify({'error': 'Invalid request', 'fields': form.errors}), 400

    changed, message = change_appointment_status(appointment, form.status.data, form.notes.data)
    if not changed:
        return jsonify({'error': message}), 409
    return jsonify({'message': 'Appointment status updated successfully.', 'appointment': appointment.to_dict(now())})


@admin_bp.route('/appointments/<int:appointment_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_appointment(appointment_id):
    """Remove an appointment record entirely"""
    appointment = db.get_or_404(Appointment, appointment_id)
    audit_details = {
        'client_id': appointment.client_id,
        'professional_id': appointment.professional_id,
        'service': appointment.service_label,
        'status': appointment.status,
        'appointment_time': f"{appointment.date.isoformat()} {appointment.start_time.strftime('%H:%M')}"
    }

    db.session.delete(appointment)
    db.session.commit()

    log_audit('delete', 'appointment', entity_id=appointment_id, details=audit_details)
    return jsonify({'message': 'Appointment deleted.'})


@admin_bp.route('/audit-logs')
@login_required
@admin_required
def audit_logs():
    """View system audit logs with filtering options"""
    action_filter = request.args.get('action', '')
    entity_type_filter = request.args.get('entity_type', '')
    user_id_filter = request.args.get('user_id', '')
    date_from = request.args.get('date_from', '')
    date_to = request.args.get('date_to', '')

    query = AuditLog.query

    if action_filter:
        query = query.filter(AuditLog.action == action_filter)

    if entity_type_filter:
        query = query.filter(AuditLog.entity_type == entity_type_filter)

    if user_id_filter and user_id_filter.isdigit():
        query = query.filter(AuditLog.user_id == int(user_id_filter))

    if date_from:
        try:
            query = query.filter(AuditLog.timestamp >= datetime.strptime(date_from, '%Y-%m-%d'))
        except ValueError:
            return jsonify({'error': 'Invalid from date format. Use YYYY-MM-DD.'}), 400

    if date_to:
        try:
            # Add one day to include the entire end date
            date_to_obj = datetime.strptime(date_to, '%Y-%m-%d') + timedelta(days=1)
            query = query.filter(AuditLog.timestamp < date_to_obj)
        except ValueError:
            return jsonify({'error': 'Invalid to date format. Use YYYY-MM-DD.'}), 400

    # Order by timestamp (newest first)
    query = query.order_by(AuditLog.timestamp.desc())

    page = request.args.get('page', 1, type=int)
    per_page = 50  # Number of logs per page
    pagination = query.paginate(page=page, per_page=per_page, error_out=False)

    return jsonify({
        'audit_logs': [entry.to_dict() for entry in pagination.items],
        'page': pagination.page,
        'pages': pagination.pages,
        'total': pagination.total
    })
