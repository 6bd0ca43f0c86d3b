"""
Tests for recurrence expansion
"""
import pytest
from datetime import date, timedelta
from app.scheduling.availability import day_of_week_for
from app.scheduling.recurrence import Cadence, compute_end_date, expand_dates
from app.scheduling.periods import period_bounds

WEDNESDAY = 3


@pytest.mark.parametrize("cadence,expected", [
    (Cadence.ONCE, date(2025, 1, 1)),
    (Cadence.WEEKLY, date(2025, 4, 1)),
    (Cadence.BIWEEKLY, date(2025, 7, 1)),
    (Cadence.MONTHLY, date(2026, 1, 1)),
])
def test_end_date_horizons(cadence, expected):
    assert compute_end_date(date(2025, 1, 1), cadence) == expected


def test_end_date_rolls_past_short_month():
    """Test a missing day in the target month spills into the next month."""
    assert compute_end_date(date(2025, 11, 30), Cadence.WEEKLY) == date(2026, 3, 2)
    assert compute_end_date(date(2023, 11, 30), Cadence.WEEKLY) == date(2024, 3, 1)
    assert compute_end_date(date(2025, 8, 31), Cadence.BIWEEKLY) == date(2026, 3, 3)


def test_rolled_end_date_keeps_the_visits_after_month_end():
    dates = expand_dates(date(2025, 11, 30), 0, Cadence.WEEKLY)

    assert dates[0] == date(2025, 11, 30)
    assert dates[-1] == date(2026, 3, 1)


def test_end_date_accepts_plain_string():
    assert compute_end_date(date(2025, 1, 1), "weekly") == date(2025, 4, 1)


def test_weekly_includes_start_date():
    """Test every Wednesday from a Wednesday start through three months."""
    dates = expand_dates(date(2025, 1, 1), WEDNESDAY, Cadence.WEEKLY)

    assert dates[0] == date(2025, 1, 1)
    assert dates[-1] == date(2025, 3, 26)
    assert len(dates) == 13


def test_biweekly_still_books_every_week():
    """Test the cadence only changes the horizon, not the spacing."""
    dates = expand_dates(date(2025, 1, 1), WEDNESDAY, Cadence.BIWEEKLY)

    assert all(b - a == timedelta(weeks=1) for a, b in zip(dates, dates[1:]))
    assert dates[-1] <= date(2025, 7, 1)


def test_once_matching_day():
    assert expand_dates(date(2025, 1, 1), WEDNESDAY, Cadence.ONCE) == [date(2025, 1, 1)]


def test_once_mismatched_day_is_empty():
    """Test a one-time booking starting on a Tuesday for Monday produces nothing."""
    assert expand_dates(date(2025, 1, 7), 1, Cadence.ONCE) == []


@pytest.mark.parametrize("cadence", list(Cadence))
@pytest.mark.parametrize("start", [date(2025, 1, 1), date(2024, 2, 29), date(2025, 12, 28)])
@pytest.mark.parametrize("day", range(7))
def test_expanded_dates_are_exactly_the_matching_days(cadence, start, day):
    """Test dates fall on the day, lie in range, and none are skipped."""
    end = compute_end_date(start, cadence)
    dates = expand_dates(start, day, cadence)

    expected = [
        start + timedelta(days=i)
        for i in range((end - start).days + 1)
        if day_of_week_for(start + timedelta(days=i)) == day
    ]
    assert dates == expected


def test_period_bounds():
    on = date(2025, 2, 12)  # Wednesday

    assert period_bounds("week", on) == (date(2025, 2, 9), date(2025, 2, 15))
    assert period_bounds("month", on) == (date(2025, 2, 1), date(2025, 2, 28))
    assert period_bounds("year", on) == (date(2025, 1, 1), date(2025, 12, 31))


def test_period_bounds_invalid():
    with pytest.raises(ValueError):
        period_bounds("decade", date(2025, 1, 1))
