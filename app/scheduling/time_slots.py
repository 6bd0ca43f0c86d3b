"""Fixed catalog of candidate visit start times"""
from dataclasses import dataclass
from datetime import time
from typing import Dict, List


MORNING = "morning"
AFTERNOON = "afternoon"
EVENING = "evening"

SEGMENTS = (MORNING, AFTERNOON, EVENING)

# Segment -> (period, 12-hour labels)
TIME_SLOTS = {
    MORNING: ("AM", ["6:00", "7:00", "8:00", "9:00", "10:00"]),
    AFTERNOON: ("PM", ["12:00", "1:00", "2:00", "3:00", "4:00"]),
    EVENING: ("PM", ["6:00", "7:00", "8:00"]),
}


def to_24_hour(label: str, period: str) -> int:
    """
    Convert a 12-hour clock label to an hour of day.

    12 PM stays 12, other PM hours add 12, 12 AM becomes 0.
    """
    hours = int(label.split(":")[0])
    if period == "PM":
        return hours if hours == 12 else hours + 12
    if period == "AM":
        return 0 if hours == 12 else hours
    raise ValueError(f"Invalid period '{period}'. Must be one of: AM, PM")


@dataclass(frozen=True)
class CandidateSlot:
    """A catalog start time, e.g. 9:00 AM in the morning segment"""
    time: str
    period: str
    segment: str

    @property
    def hour_24(self) -> int:
        return to_24_hour(self.time, self.period)

    @property
    def start_minutes(self) -> int:
        minutes = int(self.time.split(":")[1])
        return self.hour_24 * 60 + minutes

    @property
    def start_time(self) -> time:
        return time(self.start_minutes // 60, self.start_minutes % 60)

    @property
    def display(self) -> str:
        return f"{self.time} {self.period}"


def get_time_slots() -> Dict[str, List[CandidateSlot]]:
    """Return the catalog grouped by day segment, in catalog order."""
    return {
        segment: [CandidateSlot(time=label, period=period, segment=segment) for label in labels]
        for segment, (period, labels) in TIME_SLOTS.items()
    }


def parse_slot(display: str) -> CandidateSlot:
    """
    Parse a "9:00 AM" style string into its catalog slot.

    Raises:
        ValueError: The string is malformed or names a time outside the catalog
    """
    parts = display.strip().split()
    if len(parts) != 2:
        raise ValueError(f"Invalid time slot '{display}'. Expected format like '9:00 AM'")
    label, period = parts[0], parts[1].upper()

    for slots in get_time_slots().values():
        for slot in slots:
            if slot.time == label and slot.period == period:
                return slot

    raise ValueError(f"Time slot '{display}' is not offered")
