from flask import request, current_app, has_request_context
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError
from salon_booking.models.audit import AuditLog
from salon_booking import db


def log_audit(action, entity_type, entity_id=None, details=None):
    """
    Log an audit entry

    Parameters:
    - action: The action performed (e.g., 'create', 'update', 'delete')
    - entity_type: The type of entity affected (e.g., 'appointment', 'working_hours')
    - entity_id: ID of the affected entity (optional)
    - details: Additional details about the action (optional)

    Returns False instead of raising when the entry cannot be written.
    """
    try:
        user_id = None
        ip_address = None
        if has_request_context():
            # Get user ID if logged in
            if current_user and current_user.is_authenticated:
                user_id = current_user.id
            ip_address = request.remote_addr

        audit_entry = AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
            ip_address=ip_address
        )

        db.session.add(audit_entry)
        db.session.commit()

        return True
    except (SQLAlchemyError, TypeError, ValueError) as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to log audit entry: {e}")
        return False
