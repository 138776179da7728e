from salon_booking import db
from salon_booking.scheduling.pricing import ServiceDefinition, accepts_add_ons
from salon_booking.scheduling.legacy import format_duration, format_price
from datetime import datetime
from decimal import Decimal


class Service(db.Model):
    __tablename__ = 'services'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(50), nullable=False, default='general')
    price = db.Column(db.Numeric(12, 2), nullable=False)
    duration_minutes = db.Column(db.Integer, nullable=False)  # Duration in minutes
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __init__(self, name, price, duration_minutes, category='general', description=None, is_active=True):
        self.name = name
        self.price = price
        self.duration_minutes = duration_minutes
        self.category = category
        self.description = description
        self.is_active = is_active

    def to_definition(self):
        return ServiceDefinition(
            name=self.name,
            base_duration_minutes=self.duration_minutes,
            base_price=Decimal(self.price if self.price is not None else 0),
            category=self.category or '',
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'description': self.description,
            'price': str(self.price),
            'price_label': format_price(self.price),
            'duration_minutes': self.duration_minutes,
            'duration_label': format_duration(self.duration_minutes),
            'accepts_add_ons': accepts_add_ons(self.to_definition()),
        }

    def __repr__(self):
        return f'<Service {self.name}>'
