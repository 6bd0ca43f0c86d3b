"""Timezone utilities for showing stored UTC timestamps in the agency's timezone"""
import os
from datetime import datetime
import pytz

AGENCY_TZ = pytz.timezone(os.getenv("AGENCY_TIMEZONE", "America/New_York"))


def to_agency_time(dt: datetime | None) -> datetime | None:
    """
    Convert UTC naive datetime to the agency timezone for API display.

    Args:
        dt: Naive datetime assumed to be in UTC, or None

    Returns:
        Naive datetime in the agency timezone, or None if input is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        utc_dt = pytz.utc.localize(dt)
        return utc_dt.astimezone(AGENCY_TZ).replace(tzinfo=None)
    return dt
