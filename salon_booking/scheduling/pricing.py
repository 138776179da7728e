from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from salon_booking.scheduling.types import DEFAULT_DURATION_MINUTES

logger = logging.getLogger(__name__)

DEFAULT_PRICE = Decimal("0")

# Categories whose services may take an add-on. Anything else (haircuts,
# waxing, massage, removal-only services, unknown categories) ignores it.
ADD_ON_CATEGORIES = frozenset({"nails", "gel"})


@dataclass(frozen=True)
class ServiceDefinition:
    name: str
    base_duration_minutes: int
    base_price: Decimal
    category: str


class AddOnKind(str, Enum):
    SEMI = "semi"
    ACRYLIC = "acrylic"
    FEET = "feet"


@dataclass(frozen=True)
class AddOn:
    kind: AddOnKind
    extra_minutes: int
    extra_price: Decimal

    @property
    def label(self) -> str:
        return f"+Removal {self.kind.value}"


ADD_ONS: dict[AddOnKind, AddOn] = {
    AddOnKind.SEMI: AddOn(AddOnKind.SEMI, 30, Decimal("10000")),
    AddOnKind.ACRYLIC: AddOn(AddOnKind.ACRYLIC, 30, Decimal("15000")),
    AddOnKind.FEET: AddOn(AddOnKind.FEET, 30, Decimal("8000")),
}


def find_add_on(value) -> AddOn | None:
    """Resolve an add-on from its kind or name; empty or unknown values mean none."""
    if isinstance(value, AddOn):
        return value
    if isinstance(value, AddOnKind):
        return ADD_ONS[value]
    if not value:
        return None
    try:
        return ADD_ONS[AddOnKind(str(value).strip().lower())]
    except ValueError:
        logger.debug("Unknown add-on %r ignored", value)
        return None


@dataclass(frozen=True)
class Quote:
    duration_minutes: int
    price: Decimal
    add_on_applied: bool = False


def accepts_add_ons(service: ServiceDefinition | None) -> bool:
    if service is None or not service.category:
        return False
    return service.category.strip().lower() in ADD_ON_CATEGORIES


def compute(service: ServiceDefinition | None, add_on: AddOn | None = None) -> Quote:
    """Total duration and price for a service plus an optional add-on.

    An unrecognised service (None) quotes the default of 60 minutes at no
    cost, and an add-on for an incompatible category is ignored.
    """
    if service is None:
        return Quote(DEFAULT_DURATION_MINUTES, DEFAULT_PRICE)

    duration = service.base_duration_minutes
    if not isinstance(duration, int) or duration <= 0:
        duration = DEFAULT_DURATION_MINUTES
    price = Decimal(service.base_price) if service.base_price is not None else DEFAULT_PRICE

    if add_on is None or not accepts_add_ons(service):
        return Quote(duration, price)
    return Quote(duration + add_on.extra_minutes, price + add_on.extra_price, add_on_applied=True)


def quote_by_name(catalog, name: str | None, add_on=None) -> Quote:
    """Look the service up by exact name before quoting.

    ``catalog`` is anything with a ``get(name)`` returning a
    ``ServiceDefinition`` or None: a dict or a ``ServiceCatalog``.
    """
    service = catalog.get(name) if name else None
    if service is None and name:
        logger.info("Service %r not in catalogue, quoting default duration", name)
    return compute(service, find_add_on(add_on))


def service_label(service_name: str, add_on: AddOn | None, applied: bool) -> str:
    if add_on is None or not applied:
        return service_name
    return f"{service_name} ({add_on.label})"
