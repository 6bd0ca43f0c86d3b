"""Caregiver eligibility matching for a client's requested day"""
from typing import Iterable, List

from app.scheduling.availability import DAY_NAMES, resolve_availability_window


def serves_zip_code(caregiver, zip_code: str) -> bool:
    return zip_code in (caregiver.service_zipcodes or [])


def is_eligible(caregiver, zip_code: str, day_of_week: int) -> bool:
    """Caregiver serves the zip code and has an available window that day."""
    if not serves_zip_code(caregiver, zip_code):
        return False
    return resolve_availability_window(caregiver.availability, day_of_week) is not None


def eligible_caregivers(caregivers: Iterable, zip_code: str, day_of_week: int) -> List:
    """
    Caregivers who can serve a client on a day, best rated first.

    Ties keep the pool's order. An empty list is a valid result.
    """
    matches = [cg for cg in caregivers if is_eligible(cg, zip_code, day_of_week)]
    return sorted(matches, key=lambda cg: cg.performance_rating or 0, reverse=True)


def eligibility_advisory(day_of_week: int) -> str:
    return f"No caregivers available on {DAY_NAMES[day_of_week]}, try another day"
