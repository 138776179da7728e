"""
Flask CLI commands for setting up a salon database
"""
import click
from decimal import Decimal

from salon_booking import db
from salon_booking.models.availability import WorkingHours
from salon_booking.models.service import Service
from salon_booking.models.user import User, ROLE_ADMIN, ROLE_PROFESSIONAL

DEMO_SERVICES = [
    # name, category, duration in minutes, price
    ('Manicure semipermanente', 'nails', 120, Decimal('25000')),
    ('Uñas acrílicas', 'nails', 150, Decimal('35000')),
    ('Esmaltado gel', 'gel', 90, Decimal('20000')),
    ('Corte de pelo', 'hair', 45, Decimal('15000')),
    ('Masaje relajante', 'massage', 60, Decimal('30000')),
]


def seed_demo(admin_email='admin@salon-demo.com', admin_password='admin123', with_professional=True):
    """Insert the demo catalogue, salon hours and accounts that are missing.

    Returns a dict counting what was created. Existing rows are left alone so
    the command can be run more than once.
    """
    created = {'services': 0, 'business_hours': False, 'admin': False, 'professional': False}

    for name, category, duration, price in DEMO_SERVICES:
        if Service.query.filter_by(name=name).first() is None:
            db.session.add(Service(name=name, price=price, duration_minutes=duration, category=category))
            created['services'] += 1

    created['business_hours'] = WorkingHours.ensure_business_hours()

    if User.query.filter_by(email=admin_email).first() is None:
        db.session.add(User(admin_email, 'Salon', 'Admin', admin_password, role=ROLE_ADMIN))
        created['admin'] = True

    db.session.flush()

    if with_professional and User.query.filter_by(email='pro@salon-demo.com').first() is None:
        professional = User('pro@salon-demo.com', 'Valentina', 'Rojas', 'pro12345', role=ROLE_PROFESSIONAL)
        professional.specialties = Service.query.filter(Service.category.in_(['nails', 'gel'])).all()
        db.session.add(professional)
        created['professional'] = True

    db.session.commit()
    return created


def register_commands(app):
    @app.cli.command('seed-demo')
    @click.option('--admin-email', default='admin@salon-demo.com', show_default=True)
    @click.option('--admin-password', default='admin123', show_default=True)
    @click.option('--no-professional', is_flag=True, help='Skip the demo professional account.')
    def seed_demo_command(admin_email, admin_password, no_professional):
        """Seed demo services, salon hours and an admin account."""
        created = seed_demo(admin_email, admin_password, with_professional=not no_professional)
        app.logger.info("Demo data seeded: %s", created)
        click.echo(f"Services created: {created['services']}")
        click.echo(f"Business hours created: {'yes' if created['business_hours'] else 'already present'}")
        click.echo(f"Admin account: {'created' if created['admin'] else 'already present'}")
        if not no_professional:
            click.echo(f"Demo professional: {'created' if created['professional'] else 'already present'}")
