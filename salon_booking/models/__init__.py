# Import all models here for easier imports elsewhere
from .user import User
from .service import Service
from .appointment import Appointment
from .availability import WorkingHours
from .audit import AuditLog
