"""Tests for the seed-demo command."""

from salon_booking.models.availability import WorkingHours
from salon_booking.models.service import Service
from salon_booking.models.user import User


def test_seed_demo_creates_catalogue_and_accounts(app):
    result = app.test_cli_runner().invoke(args=['seed-demo'])
    assert result.exit_code == 0, result.output
    assert 'Services created: 5' in result.output

    assert Service.query.count() == 5
    assert len(WorkingHours.rows_for(None)) == 7
    admin = User.query.filter_by(email='admin@salon-demo.com').one()
    assert admin.is_admin()
    professional = User.query.filter_by(email='pro@salon-demo.com').one()
    assert set(professional.specialty_names()) == {
        'Manicure semipermanente', 'Uñas acrílicas', 'Esmaltado gel'
    }


def test_seed_demo_is_repeatable(app):
    runner = app.test_cli_runner()
    runner.invoke(args=['seed-demo'])
    result = runner.invoke(args=['seed-demo', '--no-professional'])
    assert result.exit_code == 0, result.output
    assert 'Services created: 0' in result.output
    assert 'Admin account: already present' in result.output
    assert User.query.count() == 2
