from wtforms import StringField, TextAreaField, DecimalField
from wtforms.validators import DataRequired, Length, Optional, NumberRange, ValidationError
from salon_booking.models.service import Service
from salon_booking.scheduling.legacy import parse_duration
from salon_booking.utils.forms import ApiForm


class ServiceForm(ApiForm):
    """Form for creating a salon service

    Duration may be given in minutes or in the legacy "2h 30m" form.
    """
    name = StringField('Service Name', validators=[DataRequired(), Length(max=100)])
    category = StringField('Category', validators=[DataRequired(), Length(max=50)])
    description = TextAreaField('Description', validators=[Optional(), Length(max=500)])
    price = DecimalField('Price', validators=[NumberRange(min=0)])
    duration = StringField('Duration', validators=[DataRequired()])

    def validate_name(self, name):
        if Service.query.filter_by(name=name.data).first():
            raise ValidationError('A service with this name already exists.')

    def duration_minutes(self):
        return parse_duration(str(self.duration.data))
