"""Combining a primary and an optional additional care service"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

DEFAULT_DURATION_HOURS = 4.0
DEFAULT_RATE = 35.0

PRIMARY_CATEGORIES = (
    "Activities of Daily Living (ADL)",
    "Instrumental Activities of Daily Living (IADL)",
    "Health Monitoring & Care",
)


@dataclass(frozen=True)
class ComposedService:
    """Effective visit length and hourly rate of a booking"""
    duration_hours: float
    rate: float

    @property
    def total_cost(self) -> float:
        return round(self.duration_hours * self.rate, 2)


def _duration(service) -> float:
    return float(service.duration_hours or DEFAULT_DURATION_HOURS)


def _price(service) -> float:
    return float(service.price if service.price is not None else DEFAULT_RATE)


def compose_services(primary, additional=None) -> ComposedService:
    """
    Compose the effective duration and rate of a visit.

    Durations add up; the rate is the average of the two prices, so the
    visit costs duration * rate. Without an additional service the primary's
    own figures are returned.
    """
    if additional is None:
        return ComposedService(duration_hours=_duration(primary), rate=_price(primary))

    return ComposedService(
        duration_hours=_duration(primary) + _duration(additional),
        rate=(_price(primary) + _price(additional)) / 2,
    )


def primary_service_options(services: Iterable) -> List:
    """Services that can be booked as the main care service"""
    return [s for s in services if s.category in PRIMARY_CATEGORIES]


def additional_service_options(services: Iterable, primary: Optional[object] = None) -> List:
    """Services that can be added on top of the chosen primary"""
    if primary is None:
        return list(services)
    return [s for s in services if s.code != primary.code]
