from flask_wtf import FlaskForm


class ApiForm(FlaskForm):
    """Base for forms posted as JSON by the booking front end (no CSRF token)"""
    class Meta:
        csrf = False
