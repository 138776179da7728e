"""
SQLAlchemy implementations of the scheduling ports
"""
import logging
import threading
from collections import defaultdict
from sqlalchemy.exc import SQLAlchemyError

from salon_booking import db
from salon_booking.models.appointment import Appointment, STATUS_CANCELLED
from salon_booking.models.availability import WorkingHours
from salon_booking.models.service import Service
from salon_booking.models.user import User, ROLE_PROFESSIONAL
from salon_booking.scheduling.calendar import DEFAULT_SCHEDULE
from salon_booking.scheduling.conflicts import SlotCandidate, conflicting
from salon_booking.scheduling.ports import (
    AppointmentStore, InsertOutcome, ProfessionalDirectory, ProfessionalEntry,
    ServiceCatalog, StorageError,
)

logger = logging.getLogger(__name__)

BUSINESS_CALENDAR_KEY = 'calendar:business'


def professional_calendar_key(professional_id):
    return f'calendar:professional:{professional_id}'


def load_calendar(professional_id=None):
    """A professional's own week, else the salon's, else the default schedule"""
    if professional_id is not None:
        rows = WorkingHours.rows_for(professional_id)
        if rows:
            return WorkingHours.calendar_from_rows(rows)
    rows = WorkingHours.rows_for(None)
    if rows:
        return WorkingHours.calendar_from_rows(rows)
    return DEFAULT_SCHEDULE


class SqlServiceCatalog(ServiceCatalog):
    def get(self, name):
        try:
            service = Service.query.filter_by(name=name, is_active=True).first()
        except SQLAlchemyError as e:
            raise StorageError(f"service lookup failed: {e}") from e
        return service.to_definition() if service else None

    def all(self):
        services = Service.query.filter_by(is_active=True).order_by(Service.name).all()
        return [service.to_definition() for service in services]


class SqlProfessionalDirectory(ProfessionalDirectory):
    def __init__(self, cache=None):
        self._cache = cache

    def calendar_for(self, professional_id):
        if self._cache is None:
            return load_calendar(professional_id)
        return self._cache.get_or_load(
            professional_calendar_key(professional_id),
            lambda: load_calendar(professional_id),
        )

    def _entry(self, user):
        return ProfessionalEntry(
            professional_id=user.id,
            name=user.get_full_name(),
            calendar=self.calendar_for(user.id),
            specialties=user.specialty_names(),
        )

    def get(self, professional_id):
        try:
            user = db.session.get(User, int(professional_id))
        except (TypeError, ValueError):
            return None
        except SQLAlchemyError as e:
            raise StorageError(f"professional lookup failed: {e}") from e
        if user is None or not user.is_professional() or not user.is_active:
            return None
        return self._entry(user)

    def offering(self, service_name):
        professionals = User.query.filter_by(role=ROLE_PROFESSIONAL, is_active=True).order_by(User.id).all()
        return [
            self._entry(user) for user in professionals
            if service_name in user.specialty_names()
        ]


class SqlAppointmentStore(AppointmentStore):
    """
    Appointment persistence with an atomic check-and-insert.

    Inserts for the same professional are serialised by a process lock and,
    on databases that support it, by SELECT ... FOR UPDATE on the
    professional's row, so the overlap re-check and the insert commit together.
    """

    _locks = defaultdict(threading.Lock)
    _locks_guard = threading.Lock()

    @classmethod
    def _lock_for(cls, professional_id):
        with cls._locks_guard:
            return cls._locks[str(professional_id)]

    def list_for(self, professional_id, on):
        try:
            rows = Appointment.query.filter_by(professional_id=professional_id, date=on).all()
        except SQLAlchemyError as e:
            raise StorageError(f"appointment read failed: {e}") from e
        return [row.to_domain() for row in rows]

    def insert_if_no_conflict(self, appointment):
        candidate = SlotCandidate(
            professional_id=appointment.professional_id,
            date=appointment.date,
            start_time=appointment.start_time,
            duration_minutes=appointment.effective_duration,
        )
        with self._lock_for(appointment.professional_id):
            try:
                db.session.query(User).filter_by(id=appointment.professional_id).with_for_update().first()
                live = Appointment.query.filter(
                    Appointment.professional_id == appointment.professional_id,
                    Appointment.date == appointment.date,
                    Appointment.status != STATUS_CANCELLED,
                ).all()
                clash = conflicting(candidate, [row.to_domain() for row in live])
                if clash is not None:
                    db.session.rollback()
                    return InsertOutcome(conflict=clash)

                row = Appointment.from_record(appointment)
                db.session.add(row)
                db.session.commit()
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error("Appointment insert for professional %s failed: %s", appointment.professional_id, e)
                raise StorageError(str(e)) from e
        return InsertOutcome(persisted_id=row.id)
