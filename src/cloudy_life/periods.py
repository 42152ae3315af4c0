# Project: cloudy-life
# Owner: GreenUnicorn
"""
periods.py — Rules for the user's list of residency periods.

A period is a dict with keys:
    start (datetime.date), end (datetime.date), location (str),
    coords (optional location dict from autocomplete; skips geocoding)
"""

from __future__ import annotations
from datetime import date, timedelta

from cloudy_life.categories import MIN_YEAR


class InvalidPeriodError(ValueError):
    """Raised when a period fails validation."""


def validate_period(period: dict, today: date | None = None) -> None:
    """Validate a single period.

    Raises:
        InvalidPeriodError: With a message suitable for showing to the user.
    """
    today = today or date.today()
    start, end = period.get("start"), period.get("end")

    if start is None or end is None:
        raise InvalidPeriodError("Please enter a start and end date.")
    if start >= end:
        raise InvalidPeriodError("Start date must be before end date.")
    if start.year < MIN_YEAR:
        raise InvalidPeriodError(f"Data is only available from {MIN_YEAR} onwards.")
    if end > today:
        raise InvalidPeriodError("End date cannot be in the future.")
    location = period.get("location")
    if not isinstance(location, str) or not location.strip():
        raise InvalidPeriodError("Please enter a location.")


def validate_periods(periods: list[dict], today: date | None = None) -> None:
    """Validate every period in order; the first failure is raised."""
    if not periods:
        raise InvalidPeriodError("Please add at least one location.")
    for period in periods:
        validate_period(period, today=today)


def next_period_defaults(periods: list[dict], today: date | None = None) -> dict:
    """Default values for a newly added period.

    The new period starts the day after the previous one ends and runs to
    today. The first period has no default start.

    Raises:
        InvalidPeriodError: If the previous period still ends today, since
            the user has not yet said when they left.
    """
    today = today or date.today()
    if not periods:
        return {"start": None, "end": today, "location": ""}

    last_end = periods[-1].get("end")
    if last_end == today:
        raise InvalidPeriodError(
            "Please set an end date for this location before adding another."
        )

    start = last_end + timedelta(days=1) if last_end else None
    return {"start": start, "end": today, "location": ""}
