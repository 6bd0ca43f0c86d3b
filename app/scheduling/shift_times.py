"""Clock arithmetic for generated shifts"""
from datetime import time
from typing import Tuple

from app.scheduling.time_slots import CandidateSlot

MINUTES_PER_DAY = 24 * 60


def duration_minutes(duration_hours: float) -> int:
    """Visit length rounded to whole minutes."""
    return round(duration_hours * 60)


def scheduled_hours(duration_hours: float) -> float:
    """Hours actually covered by a shift once its length is rounded to minutes."""
    return duration_minutes(duration_hours) / 60


def shift_times(slot: CandidateSlot, duration_hours: float) -> Tuple[time, time]:
    """
    Start and end time of a shift beginning at a catalog slot.

    The end wraps past midnight, so end - start equals scheduled_hours(duration_hours)
    modulo 24h.
    """
    end_minutes = (slot.start_minutes + duration_minutes(duration_hours)) % MINUTES_PER_DAY
    return slot.start_time, time(end_minutes // 60, end_minutes % 60)
