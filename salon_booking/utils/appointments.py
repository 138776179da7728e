from flask import current_app
from salon_booking import db
from salon_booking.models.appointment import STATUS_CONFIRMED
from salon_booking.utils.audit import log_audit


def change_appointment_status(appointment, new_status, notes=None):
    """
    Apply a manual status transition (confirm or cancel) and record it.

    Returns (True, None) on success or (False, message) when the transition
    is not allowed from the current status.
    """
    old_status = appointment.status
    if not appointment.can_transition_to(new_status):
        return False, f'Cannot change a {old_status} appointment to {new_status}.'

    # TRANSITIONS only ever leads to confirmed or cancelled
    if new_status == STATUS_CONFIRMED:
        appointment.confirm()
    else:
        appointment.cancel()
    if notes:
        appointment.notes = notes
    db.session.commit()

    audit_details = {
        'old_status': old_status,
        'new_status': new_status,
        'client_id': appointment.client_id,
        'professional_id': appointment.professional_id,
        'service': appointment.service_label,
        'appointment_time': f"{appointment.date.isoformat()} {appointment.start_time.strftime('%H:%M')}"
    }
    if not log_audit('update', 'appointment_status', entity_id=appointment.id, details=audit_details):
        current_app.logger.error(f"Failed to create audit log for appointment status {appointment.id}")
    return True, None
