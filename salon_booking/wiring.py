"""
Builds the scheduling engine for the current request from app config
"""
from datetime import datetime
from flask import current_app

from salon_booking.cache import ReadThroughCache
from salon_booking.repository import (
    SqlAppointmentStore, SqlProfessionalDirectory, SqlServiceCatalog,
    professional_calendar_key,
)
from salon_booking.scheduling.booking import BookingOrchestrator


def init_scheduling(app):
    app.extensions['calendar_cache'] = ReadThroughCache(ttl_seconds=app.config['CALENDAR_CACHE_TTL'])


def get_clock():
    return current_app.config.get('SCHEDULING_CLOCK') or datetime.now


def now():
    return get_clock()()


def get_calendar_cache():
    return current_app.extensions['calendar_cache']


def get_directory():
    return SqlProfessionalDirectory(cache=get_calendar_cache())


def get_orchestrator():
    return BookingOrchestrator(
        catalog=SqlServiceCatalog(),
        directory=get_directory(),
        store=SqlAppointmentStore(),
        clock=get_clock(),
    )


def invalidate_calendar(professional_id=None):
    """Drop cached calendars after working hours change.

    Changing the shared salon week affects every professional without their
    own rows, so it clears everything.
    """
    cache = get_calendar_cache()
    if professional_id is None:
        cache.clear()
    else:
        cache.invalidate(professional_calendar_key(professional_id))
