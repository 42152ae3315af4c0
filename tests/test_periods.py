# Project: cloudy-life
# Owner: GreenUnicorn
"""Tests for periods.py — validate_period, validate_periods, next_period_defaults."""

import pytest
from datetime import date

from cloudy_life.periods import (
    InvalidPeriodError,
    next_period_defaults,
    validate_period,
    validate_periods,
)


TODAY = date(2024, 6, 15)


def _period(start=date(1990, 1, 1), end=date(2004, 8, 31), location="London") -> dict:
    return {"start": start, "end": end, "location": location}


# ---------------------------------------------------------------------------
# validate_period
# ---------------------------------------------------------------------------

class TestValidatePeriod:

    def test_valid_period_passes(self):
        validate_period(_period(), today=TODAY)

    def test_missing_dates(self):
        with pytest.raises(InvalidPeriodError, match="start and end date"):
            validate_period(_period(start=None), today=TODAY)
        with pytest.raises(InvalidPeriodError, match="start and end date"):
            validate_period(_period(end=None), today=TODAY)

    def test_start_must_precede_end(self):
        with pytest.raises(InvalidPeriodError, match="Start date must be before end date"):
            validate_period(_period(start=date(2000, 1, 1), end=date(2000, 1, 1)), today=TODAY)

    def test_start_before_1970_rejected(self):
        with pytest.raises(InvalidPeriodError, match="1970 onwards"):
            validate_period(_period(start=date(1969, 12, 31)), today=TODAY)

    def test_start_in_1970_accepted(self):
        validate_period(_period(start=date(1970, 1, 1)), today=TODAY)

    def test_end_in_future_rejected(self):
        with pytest.raises(InvalidPeriodError, match="future"):
            validate_period(_period(end=date(2024, 6, 16)), today=TODAY)

    def test_end_today_accepted(self):
        validate_period(_period(end=TODAY), today=TODAY)

    @pytest.mark.parametrize("location", ["", "   ", None, 123])
    def test_blank_location_rejected(self, location):
        with pytest.raises(InvalidPeriodError, match="enter a location"):
            validate_period(_period(location=location), today=TODAY)

    def test_is_value_error(self):
        assert issubclass(InvalidPeriodError, ValueError)


# ---------------------------------------------------------------------------
# validate_periods
# ---------------------------------------------------------------------------

def test_validate_periods_empty_list():
    with pytest.raises(InvalidPeriodError, match="at least one location"):
        validate_periods([], today=TODAY)


def test_validate_periods_reports_first_failure():
    periods = [_period(), _period(start=date(1960, 1, 1), location="")]
    with pytest.raises(InvalidPeriodError, match="1970"):
        validate_periods(periods, today=TODAY)


def test_validate_periods_allows_overlap_and_gaps():
    """Overlapping or non-contiguous periods are accepted as given."""
    periods = [
        _period(start=date(1990, 1, 1), end=date(2000, 1, 1)),
        _period(start=date(1995, 1, 1), end=date(1999, 1, 1), location="Paris"),
        _period(start=date(2010, 1, 1), end=date(2012, 1, 1), location="Oslo"),
    ]
    validate_periods(periods, today=TODAY)


# ---------------------------------------------------------------------------
# next_period_defaults
# ---------------------------------------------------------------------------

class TestNextPeriodDefaults:

    def test_first_period(self):
        assert next_period_defaults([], today=TODAY) == {"start": None, "end": TODAY, "location": ""}

    def test_starts_day_after_previous_end(self):
        defaults = next_period_defaults([_period(end=date(2004, 8, 31))], today=TODAY)
        assert defaults["start"] == date(2004, 9, 1)
        assert defaults["end"] == TODAY
        assert defaults["location"] == ""

    def test_crosses_year_boundary(self):
        defaults = next_period_defaults([_period(end=date(1999, 12, 31))], today=TODAY)
        assert defaults["start"] == date(2000, 1, 1)

    def test_previous_period_ending_today_is_refused(self):
        with pytest.raises(InvalidPeriodError, match="set an end date"):
            next_period_defaults([_period(end=TODAY)], today=TODAY)

    def test_previous_period_without_end(self):
        defaults = next_period_defaults([_period(end=None)], today=TODAY)
        assert defaults["start"] is None
