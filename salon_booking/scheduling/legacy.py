"""Conversions for the legacy text formats used by older screens and exports.

Inside the scheduling package durations are always integer minutes and
prices are ``Decimal``; these helpers only run at the edges.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from urllib.parse import urlencode

from salon_booking.scheduling.types import DEFAULT_DURATION_MINUTES, Appointment

_HOURS = re.compile(r"(\d+)\s*h")
_MINUTES = re.compile(r"(\d+)\s*m")
_DIGITS = re.compile(r"\d+")

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


def parse_duration(text) -> int:
    """``"2h 30m"`` → 150. Bare digits are minutes; anything unreadable is 60."""
    if isinstance(text, int) and not isinstance(text, bool):
        return text if text > 0 else DEFAULT_DURATION_MINUTES
    if not text or not isinstance(text, str):
        return DEFAULT_DURATION_MINUTES

    total = 0
    hours = _HOURS.search(text)
    minutes = _MINUTES.search(text)
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    if total == 0:
        digits = _DIGITS.search(text)
        total = int(digits.group(0)) if digits else 0
    return total if total > 0 else DEFAULT_DURATION_MINUTES


def format_duration(minutes: int) -> str:
    hours, rest = divmod(int(minutes), 60)
    if hours and rest:
        return f"{hours}h {rest}m"
    if hours:
        return f"{hours}h"
    return f"{rest}m"


def format_price(price) -> str:
    """Whole currency units with a dot thousands separator: ``$150.000``."""
    try:
        amount = int(Decimal(price).quantize(Decimal("1")))
    except (InvalidOperation, TypeError, ValueError):
        amount = 0
    return "$" + f"{amount:,}".replace(",", ".")


def parse_price(text) -> Decimal:
    """Inverse of :func:`format_price`; only the digits are kept."""
    if isinstance(text, (int, Decimal)):
        return Decimal(text)
    digits = "".join(_DIGITS.findall(text or ""))
    return Decimal(digits) if digits else Decimal("0")


def _calendar_stamp(moment) -> str:
    return moment.strftime("%Y%m%dT%H%M%S")


def google_calendar_url(appointment: Appointment, professional_name: str | None = None, client_name: str | None = None) -> str:
    """Google Calendar "add event" link covering the appointment interval."""
    start, end = appointment.starts_at, appointment.ends_at
    if start is None:
        return ""
    professional_name = professional_name or "Professional"
    client_name = client_name or "Client"
    details = "\n".join([
        f"Service: {appointment.service_label}",
        f"Client: {client_name}",
        f"Professional: {professional_name}",
        f"Price: {format_price(appointment.price)}",
    ])
    query = urlencode({
        "action": "TEMPLATE",
        "text": f"Appointment: {professional_name} - Client: {client_name}",
        "dates": f"{_calendar_stamp(start)}/{_calendar_stamp(end)}",
        "details": details,
        "location": "Beauty Salon",
    })
    return f"{GOOGLE_CALENDAR_URL}?{query}"
