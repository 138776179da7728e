from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime
from salon_booking import db, login_manager

# User roles
ROLE_CLIENT = 'client'
ROLE_PROFESSIONAL = 'professional'
ROLE_ADMIN = 'admin'

# Services a professional is qualified to perform
professional_services = db.Table(
    'professional_services',
    db.Column('professional_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
    db.Column('service_id', db.Integer, db.ForeignKey('services.id'), primary_key=True)
)


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(20), default=ROLE_CLIENT)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    appointments_as_client = db.relationship('Appointment', foreign_keys='Appointment.client_id', backref='client', lazy='dynamic')
    appointments_as_professional = db.relationship('Appointment', foreign_keys='Appointment.professional_id', backref='professional', lazy='dynamic')
    working_hours = db.relationship('WorkingHours', backref='professional', lazy='dynamic')
    specialties = db.relationship('Service', secondary=professional_services, backref=db.backref('professionals', lazy='dynamic'))

    def __init__(self, email, first_name, last_name, password, role=ROLE_CLIENT, phone=None):
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.set_password(password)
        self.role = role
        self.phone = phone

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def is_admin(self):
        return self.role == ROLE_ADMIN

    def is_professional(self):
        return self.role == ROLE_PROFESSIONAL

    def is_client(self):
        return self.role == ROLE_CLIENT

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}"

    def specialty_names(self):
        return tuple(service.name for service in self.specialties)

    def to_dict(self):
        data = {
            'id': self.id,
            'name': self.get_full_name(),
            'role': self.role,
        }
        if self.is_professional():
            data['specialties'] = list(self.specialty_names())
        return data

    def __repr__(self):
        return f'<User {self.email}>'


@login_manager.user_loader
def load_user(id):
    return db.session.get(User, int(id))
