from flask import Blueprint, jsonify, request
from salon_booking.models.user import User, ROLE_PROFESSIONAL
from salon_booking.models.service import Service
from salon_booking.scheduling.pricing import ADD_ONS
from salon_booking.scheduling.legacy import format_price
from salon_booking.wiring import get_directory

main_bp = Blueprint('main', __name__)


def _active_professionals():
    return User.query.filter_by(role=ROLE_PROFESSIONAL, is_active=True).order_by(User.id).all()


@main_bp.route('/')
def index():
    """Landing data: active services and professionals"""
    services = Service.query.filter_by(is_active=True).order_by(Service.name).all()
    return jsonify({
        'services': [service.to_dict() for service in services],
        'professionals': [user.to_dict() for user in _active_professionals()]
    })


@main_bp.route('/services')
def services():
    """All active salon services"""
    services = Service.query.filter_by(is_active=True).order_by(Service.name).all()
    return jsonify({'services': [service.to_dict() for service in services]})


@main_bp.route('/add-ons')
def add_ons():
    """Optional extras that can be added to nail services"""
    return jsonify({'add_ons': [
        {
            'kind': add_on.kind.value,
            'extra_minutes': add_on.extra_minutes,
            'extra_price': str(add_on.extra_price),
            'extra_price_label': format_price(add_on.extra_price)
        }
        for add_on in ADD_ONS.values()
    ]})


@main_bp.route('/professionals')
def professionals():
    """Professionals, optionally only those offering an exact service name"""
    service_name = request.args.get('service')
    if not service_name:
        return jsonify({'professionals': [user.to_dict() for user in _active_professionals()]})

    entries = get_directory().offering(service_name)
    return jsonify({'professionals': [
        {'id': entry.professional_id, 'name': entry.name, 'specialties': list(entry.specialties)}
        for entry in entries
    ]})
