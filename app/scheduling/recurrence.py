"""Recurrence expansion of a booking into shift dates"""
from datetime import date, timedelta
from enum import Enum
from typing import List

from dateutil.relativedelta import relativedelta

from app.scheduling.availability import day_of_week_for


class Cadence(str, Enum):
    """How long a recurring booking runs"""
    ONCE = "once"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


# Cadence -> booking horizon in months.
# The cadence only sets the horizon; every cadence books each matching weekday.
HORIZON_MONTHS = {
    Cadence.ONCE: 0,
    Cadence.WEEKLY: 3,
    Cadence.BIWEEKLY: 6,
    Cadence.MONTHLY: 12,
}


def compute_end_date(start_date: date, cadence: Cadence) -> date:
    """
    Last day covered by a booking.

    A day past the end of the target month rolls forward into the next month,
    so 30 Nov + 3 months is 2 Mar (or 1 Mar in a leap year).
    """
    first_of_month = start_date.replace(day=1) + relativedelta(months=HORIZON_MONTHS[Cadence(cadence)])
    return first_of_month + timedelta(days=start_date.day - 1)


def expand_dates(start_date: date, day_of_week: int, cadence: Cadence) -> List[date]:
    """
    Every date in [start_date, end_date] falling on day_of_week, ascending.

    A one-time booking whose start date is a different weekday produces no dates.
    """
    end_date = compute_end_date(start_date, cadence)

    offset = (day_of_week - day_of_week_for(start_date)) % 7
    current = start_date + timedelta(days=offset)

    dates = []
    while current <= end_date:
        dates.append(current)
        current += timedelta(weeks=1)
    return dates
