"""In-process implementations of the scheduling ports."""
from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import date
from typing import Iterable

from salon_booking.scheduling.conflicts import SlotCandidate, conflicting
from salon_booking.scheduling.ports import (
    AppointmentStore,
    InsertOutcome,
    ProfessionalDirectory,
    ProfessionalEntry,
    ServiceCatalog,
)
from salon_booking.scheduling.pricing import ServiceDefinition
from salon_booking.scheduling.types import Appointment


class InMemoryServiceCatalog(ServiceCatalog):
    def __init__(self, services: Iterable[ServiceDefinition] = ()):
        self._services = {service.name: service for service in services}

    def get(self, name):
        return self._services.get(name)

    def all(self):
        return list(self._services.values())


class InMemoryProfessionalDirectory(ProfessionalDirectory):
    def __init__(self, professionals: Iterable[ProfessionalEntry] = ()):
        self._professionals = {str(entry.professional_id): entry for entry in professionals}

    def get(self, professional_id):
        return self._professionals.get(str(professional_id))

    def offering(self, service_name):
        return [entry for entry in self._professionals.values() if entry.offers(service_name)]


class InMemoryAppointmentStore(AppointmentStore):
    """Append-only list guarded by a single lock for check-and-insert."""

    def __init__(self, appointments: Iterable[Appointment] = ()):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._appointments: list[Appointment] = []
        for appointment in appointments:
            if appointment.id is None:
                appointment = replace(appointment, id=next(self._ids))
            self._appointments.append(appointment)

    def list_for(self, professional_id, on: date):
        with self._lock:
            return [
                appointment for appointment in self._appointments
                if str(appointment.professional_id) == str(professional_id) and appointment.date == on
            ]

    def insert_if_no_conflict(self, appointment):
        candidate = SlotCandidate(
            professional_id=appointment.professional_id,
            date=appointment.date,
            start_time=appointment.start_time,
            duration_minutes=appointment.effective_duration,
        )
        with self._lock:
            clash = conflicting(candidate, self._appointments)
            if clash is not None:
                return InsertOutcome(conflict=clash)
            persisted_id = next(self._ids)
            self._appointments.append(replace(appointment, id=persisted_id))
            return InsertOutcome(persisted_id=persisted_id)

    def all(self) -> list[Appointment]:
        with self._lock:
            return list(self._appointments)
