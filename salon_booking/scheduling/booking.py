"""Validation and commit of new appointments.

The overlap check run here against the caller's ``existing`` list only
serves the booking screens; the store re-runs it inside its atomic insert,
and that answer is the one that counts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from enum import Enum
from typing import Callable, Iterable

from salon_booking.scheduling.conflicts import SlotCandidate, is_occupied
from salon_booking.scheduling.ports import (
    AppointmentStore,
    ProfessionalDirectory,
    ServiceCatalog,
    StorageError,
)
from salon_booking.scheduling.pricing import AddOn, Quote, compute, find_add_on, quote_by_name, service_label
from salon_booking.scheduling.types import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


class BookingError(str, Enum):
    INVALID_REQUEST = "invalid_request"
    NO_SUCH_PROFESSIONAL = "no_such_professional"
    PAST_TIME = "past_time"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
    SLOT_TAKEN = "slot_taken"
    STORAGE_UNAVAILABLE = "storage_unavailable"


_MESSAGES = {
    BookingError.INVALID_REQUEST: "A professional, a date and a start time are required.",
    BookingError.NO_SUCH_PROFESSIONAL: "The selected professional does not exist.",
    BookingError.PAST_TIME: "Appointments must start in the future.",
    BookingError.OUTSIDE_BUSINESS_HOURS: "The appointment does not fit inside working hours for that day.",
    BookingError.SLOT_TAKEN: "Sorry, this time slot is no longer available. Please refresh the available times.",
    BookingError.STORAGE_UNAVAILABLE: "The booking could not be confirmed. Please try again.",
}


@dataclass(frozen=True)
class BookingRequest:
    professional_id: int | None
    service_label: str | None
    date: date | None
    start_time: time | None
    client_id: int | None = None
    add_on: AddOn | str | None = None


@dataclass(frozen=True)
class BookingResult:
    appointment: Appointment | None = None
    error: BookingError | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.appointment is not None

    @classmethod
    def success(cls, appointment: Appointment) -> "BookingResult":
        return cls(appointment=appointment)

    @classmethod
    def failure(cls, error: BookingError) -> "BookingResult":
        return cls(error=error, message=_MESSAGES[error])


class BookingOrchestrator:
    def __init__(
        self,
        catalog: ServiceCatalog,
        directory: ProfessionalDirectory,
        store: AppointmentStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._catalog = catalog
        self._directory = directory
        self._store = store
        self._clock = clock

    def quote(self, service_name: str | None, add_on=None) -> Quote:
        """Duration and price for a service name; StorageError propagates."""
        return quote_by_name(self._catalog, service_name, add_on)

    def attempt_booking(self, request: BookingRequest) -> BookingResult:
        """Fetch the latest appointments for the day, then book."""
        existing: list[Appointment] = []
        if request.professional_id is not None and request.date is not None:
            try:
                existing = self._store.list_for(request.professional_id, request.date)
            except StorageError as exc:
                logger.warning("Could not load appointments for professional %s: %s", request.professional_id, exc)
                return BookingResult.failure(BookingError.STORAGE_UNAVAILABLE)
        return self.book(request, existing)

    def book(self, request: BookingRequest, existing: Iterable[Appointment]) -> BookingResult:
        if request.professional_id is None or request.date is None or request.start_time is None:
            return BookingResult.failure(BookingError.INVALID_REQUEST)

        try:
            professional = self._directory.get(request.professional_id)
        except StorageError as exc:
            logger.warning("Professional lookup failed: %s", exc)
            return BookingResult.failure(BookingError.STORAGE_UNAVAILABLE)
        if professional is None:
            return BookingResult.failure(BookingError.NO_SUCH_PROFESSIONAL)

        start_time = request.start_time.replace(second=0, microsecond=0)
        if datetime.combine(request.date, start_time) <= self._clock():
            return BookingResult.failure(BookingError.PAST_TIME)

        add_on = find_add_on(request.add_on)
        try:
            service = self._catalog.get(request.service_label) if request.service_label else None
        except StorageError as exc:
            logger.warning("Service lookup failed: %s", exc)
            return BookingResult.failure(BookingError.STORAGE_UNAVAILABLE)
        quote = compute(service, add_on)

        candidate = SlotCandidate(
            professional_id=professional.professional_id,
            date=request.date,
            start_time=start_time,
            duration_minutes=quote.duration_minutes,
        )
        window = professional.calendar.window_for(request.date)
        if window is None or not window.contains(candidate.start_minute, candidate.end_minute):
            return BookingResult.failure(BookingError.OUTSIDE_BUSINESS_HOURS)

        if is_occupied(candidate, existing):
            logger.info(
                "Slot %s %s taken for professional %s",
                request.date, start_time.strftime("%H:%M"), professional.professional_id,
            )
            return BookingResult.failure(BookingError.SLOT_TAKEN)

        label = service_label(
            service.name if service else (request.service_label or "Service"),
            add_on,
            quote.add_on_applied,
        )
        appointment = Appointment(
            id=None,
            professional_id=professional.professional_id,
            client_id=request.client_id,
            date=request.date,
            start_time=start_time,
            duration_minutes=quote.duration_minutes,
            service_label=label,
            price=quote.price,
            status=AppointmentStatus.PENDING,
        )

        try:
            outcome = self._store.insert_if_no_conflict(appointment)
        except StorageError as exc:
            logger.warning("Commit of appointment for professional %s unresolved: %s", professional.professional_id, exc)
            return BookingResult.failure(BookingError.STORAGE_UNAVAILABLE)

        if not outcome.committed:
            logger.info(
                "Store rejected overlapping appointment %s %s for professional %s",
                request.date, start_time.strftime("%H:%M"), professional.professional_id,
            )
            return BookingResult.failure(BookingError.SLOT_TAKEN)

        logger.info("Booked appointment %s for professional %s", outcome.persisted_id, professional.professional_id)
        return BookingResult.success(replace(appointment, id=outcome.persisted_id))
