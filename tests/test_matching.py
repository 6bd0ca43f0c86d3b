"""
Tests for caregiver eligibility matching
"""
from app.scheduling.matching import eligibility_advisory, eligible_caregivers, is_eligible
from tests.factories import make_caregiver, make_window

MONDAY = 1
TUESDAY = 2


def test_zip_code_and_day_filter():
    """Test only the caregiver serving the client's zip code is returned."""
    a = make_caregiver(["90001", "90002"], [make_window(MONDAY)])
    b = make_caregiver(["90003"], [make_window(MONDAY)])

    assert eligible_caregivers([a, b], "90001", MONDAY) == [a]


def test_unavailable_day_excluded():
    """Test a caregiver without an available window that day is never eligible."""
    off = make_caregiver(["90001"], [make_window(MONDAY, is_available=False), make_window(TUESDAY)])

    assert eligible_caregivers([off], "90001", MONDAY) == []
    assert eligible_caregivers([off], "90001", TUESDAY) == [off]


def test_missing_zip_codes_and_availability():
    cg = make_caregiver(None, None)

    assert not is_eligible(cg, "90001", MONDAY)


def test_sorted_by_rating_descending():
    low = make_caregiver(["90001"], [make_window(MONDAY)], rating=3.2)
    high = make_caregiver(["90001"], [make_window(MONDAY)], rating=4.9)
    unrated = make_caregiver(["90001"], [make_window(MONDAY)], rating=None)

    result = eligible_caregivers([low, unrated, high], "90001", MONDAY)

    assert result == [high, low, unrated]


def test_ties_keep_pool_order():
    first = make_caregiver(["90001"], [make_window(MONDAY)], rating=4.5, first_name="First")
    second = make_caregiver(["90001"], [make_window(MONDAY)], rating=4.5, first_name="Second")

    assert eligible_caregivers([first, second], "90001", MONDAY) == [first, second]


def test_eligibility_matches_definition():
    """Test a caregiver is returned iff it serves the zip and has an available window."""
    pool = [
        make_caregiver(zips, windows)
        for zips in (["90001"], ["90002"], [], ["90001", "90005"])
        for windows in ([], [make_window(MONDAY)], [make_window(MONDAY, is_available=False)], [make_window(TUESDAY)])
    ]

    result = eligible_caregivers(pool, "90001", MONDAY)

    for cg in pool:
        expected = "90001" in cg.service_zipcodes and any(
            w.day_of_week == MONDAY and w.is_available for w in cg.availability
        )
        assert (cg in result) == expected


def test_eligibility_advisory_names_day():
    assert eligibility_advisory(TUESDAY) == "No caregivers available on Tuesday, try another day"
