from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date

from salon_booking.scheduling.calendar import WorkingHoursCalendar
from salon_booking.scheduling.pricing import ServiceDefinition
from salon_booking.scheduling.types import Appointment


class StorageError(RuntimeError):
    """Raised when the store cannot read or commit (timeouts, lost connections)."""
    pass


@dataclass(frozen=True)
class ProfessionalEntry:
    professional_id: int
    name: str
    calendar: WorkingHoursCalendar
    specialties: tuple[str, ...] = field(default_factory=tuple)

    def offers(self, service_name: str) -> bool:
        return service_name in self.specialties


@dataclass(frozen=True)
class InsertOutcome:
    persisted_id: int | None = None
    conflict: Appointment | None = None

    @property
    def committed(self) -> bool:
        return self.persisted_id is not None


class ServiceCatalog(ABC):
    @abstractmethod
    def get(self, name: str) -> ServiceDefinition | None:
        """Service definition by exact name."""
        raise NotImplementedError

    @abstractmethod
    def all(self) -> list[ServiceDefinition]:
        raise NotImplementedError


class ProfessionalDirectory(ABC):
    @abstractmethod
    def get(self, professional_id) -> ProfessionalEntry | None:
        raise NotImplementedError

    @abstractmethod
    def offering(self, service_name: str) -> list[ProfessionalEntry]:
        """Professionals whose specialties contain exactly ``service_name``."""
        raise NotImplementedError


class AppointmentStore(ABC):
    @abstractmethod
    def list_for(self, professional_id, on: date) -> list[Appointment]:
        """Appointments of a professional on a calendar day, in any status."""
        raise NotImplementedError

    @abstractmethod
    def insert_if_no_conflict(self, appointment: Appointment) -> InsertOutcome:
        """Atomically re-check overlap and insert.

        Returns an outcome with ``persisted_id`` on commit or ``conflict`` when
        an overlapping live appointment already exists. Raises StorageError
        when the outcome is unknown; nothing may be assumed written then.
        """
        raise NotImplementedError
