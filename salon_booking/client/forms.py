from wtforms import StringField, IntegerField, DateField, TimeField
from wtforms.validators import DataRequired, Length, ValidationError
from salon_booking.scheduling.pricing import find_add_on
from salon_booking.utils.forms import ApiForm


class AvailableTimesForm(ApiForm):
    """Form for asking which start times are open"""
    professional_id = IntegerField('Professional', validators=[DataRequired()])
    service = StringField('Service', validators=[DataRequired(), Length(max=100)])
    add_on = StringField('Add-on')
    appointment_date = DateField('Date', validators=[DataRequired()], format='%Y-%m-%d')

    def validate_add_on(self, add_on):
        if add_on.data and find_add_on(add_on.data) is None:
            raise ValidationError('Unknown add-on.')


class AppointmentForm(AvailableTimesForm):
    """Form for booking a new appointment"""
    start_time = TimeField('Start Time', validators=[DataRequired()], format='%H:%M')
