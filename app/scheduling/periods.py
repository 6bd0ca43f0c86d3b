"""Calendar periods used to filter orders"""
from datetime import date, timedelta
from typing import Tuple

from dateutil.relativedelta import relativedelta

from app.scheduling.availability import day_of_week_for

VALID_PERIODS = ["week", "month", "year"]


def period_bounds(period: str, on: date) -> Tuple[date, date]:
    """First and last day of the week (Sunday start), month or year containing `on`."""
    if period == "week":
        start = on - timedelta(days=day_of_week_for(on))
        return start, start + timedelta(days=6)
    if period == "month":
        start = on.replace(day=1)
        return start, start + relativedelta(months=1) - timedelta(days=1)
    if period == "year":
        return date(on.year, 1, 1), date(on.year, 12, 31)
    raise ValueError(f"Invalid period '{period}'. Must be one of: {', '.join(VALID_PERIODS)}")

