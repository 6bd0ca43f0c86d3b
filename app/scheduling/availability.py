"""Caregiver availability windows and slot feasibility"""
from datetime import date, time
from typing import Dict, Iterable, List, Optional, Union

from app.scheduling.shift_times import duration_minutes
from app.scheduling.time_slots import CandidateSlot, get_time_slots

# 0=Sunday .. 6=Saturday
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def day_of_week_for(value: date) -> int:
    """Day index of a date with Sunday as 0."""
    return value.isoweekday() % 7


def to_minutes(value: Union[time, str]) -> int:
    """Minutes since midnight for a time or an "HH:MM[:SS]" string."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def resolve_availability_window(windows: Optional[Iterable], day_of_week: int):
    """
    Find a caregiver's available window for a day.

    When several windows exist for the same day the first available one wins.

    Returns:
        The matching window, or None when the caregiver is unavailable that day
    """
    for window in windows or []:
        if window.day_of_week == day_of_week and window.is_available:
            return window
    return None


def feasible_slots(window, duration_hours: float) -> Dict[str, List[CandidateSlot]]:
    """
    Filter the time-slot catalog to start times that fit inside a window.

    A slot is kept when [start, start + duration) lies entirely within the
    window, boundaries included. A missing window yields empty segments.

    Args:
        window: Availability window with start_time/end_time, or None
        duration_hours: Visit length in hours

    Returns:
        Segment name -> feasible slots, in catalog order
    """
    if duration_hours is None or duration_hours <= 0:
        raise ValueError("Service duration must be positive")

    catalog = get_time_slots()
    if window is None:
        return {segment: [] for segment in catalog}

    window_start = to_minutes(window.start_time)
    window_end = to_minutes(window.end_time)
    visit_minutes = duration_minutes(duration_hours)

    return {
        segment: [
            slot for slot in slots
            if slot.start_minutes >= window_start
            and slot.start_minutes + visit_minutes <= window_end
        ]
        for segment, slots in catalog.items()
    }


def has_feasible_slot(slots: Dict[str, List[CandidateSlot]]) -> bool:
    return any(slots.values())
