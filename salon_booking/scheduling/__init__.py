# Pure scheduling engine: no Flask or database imports below this package.
from .types import Appointment, AppointmentStatus, DEFAULT_DURATION_MINUTES
from .calendar import DEFAULT_SCHEDULE, TimeWindow, WeekDaySchedule, Weekday, WorkingHoursCalendar
from .pricing import ADD_ONS, AddOn, AddOnKind, Quote, ServiceDefinition, compute, find_add_on
from .slots import SLOT_INTERVAL_MINUTES, generate, list_bookable_days, list_bookable_slots
from .conflicts import SlotCandidate, is_occupied
from .status import DisplayStatus, display_status, history, resolve, upcoming_today
from .ports import (
    AppointmentStore,
    InsertOutcome,
    ProfessionalDirectory,
    ProfessionalEntry,
    ServiceCatalog,
    StorageError,
)
from .booking import BookingError, BookingOrchestrator, BookingRequest, BookingResult
from .memory import InMemoryAppointmentStore, InMemoryProfessionalDirectory, InMemoryServiceCatalog
