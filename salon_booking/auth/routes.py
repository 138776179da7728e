from flask import Blueprint, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from salon_booking import login_manager
from salon_booking.models.user import User
from salon_booking.auth.forms import LoginForm
from salon_booking.utils.audit import log_audit

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Please log in to access this page.'}), 401


@auth_bp.route('/login', methods=['POST'])
def login():
    if current_user.is_authenticated:
        return jsonify({'user': current_user.to_dict()})

    form = LoginForm()
    if not form.validate_on_submit():
        return jsonify({'error': 'Invalid request', 'fields': form.errors}), 400

    user = User.query.filter_by(email=form.email.data).first()
    if not user or not user.check_password(form.password.data):
        log_audit('attempt', 'login', details={'email': form.email.data, 'reason': 'bad_credentials'})
        return jsonify({'error': 'Invalid email or password.'}), 401

    if not user.is_active:
        # Log failed login due to inactive account
        audit_details = {
            'email': form.email.data,
            'reason': 'account_inactive',
            'ip_address': request.remote_addr
        }
        log_audit('attempt', 'login', user.id, audit_details)
        return jsonify({'error': 'Your account is currently deactivated. Please contact support.'}), 403

    login_user(user, remember=form.remember_me.data)
    log_audit('perform', 'login', user.id, {'email': user.email, 'remember_me': form.remember_me.data})
    return jsonify({'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    log_audit('perform', 'logout', current_user.id)
    logout_user()
    return jsonify({'message': 'You have been logged out.'})
