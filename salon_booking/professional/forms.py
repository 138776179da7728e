from wtforms import SelectField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional
from salon_booking.models.appointment import STATUS_CONFIRMED, STATUS_CANCELLED
from salon_booking.utils.forms import ApiForm


class AppointmentStatusForm(ApiForm):
    """Form for confirming or cancelling an appointment"""
    status = SelectField('Status', validators=[DataRequired()], choices=[
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_CANCELLED, 'Cancelled')
    ])
    notes = TextAreaField('Notes', validators=[Optional(), Length(max=500)])
