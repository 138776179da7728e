from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length
from salon_booking.utils.forms import ApiForm


class LoginForm(ApiForm):
    """Form for signing in"""
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=120)])
    password = PasswordField('Password', validators=[DataRequired()])
    remember_me = BooleanField('Remember Me')
