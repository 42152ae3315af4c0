# Project: cloudy-life
# Owner: GreenUnicorn
"""
pipeline.py — Turn the user's periods into a lifetime report.

validate → resolve location → fetch daily cloud cover → analyze → aggregate.

Periods are processed one after another. A period that cannot be resolved
or fetched aborts the whole report; there is no partial result.
"""

from __future__ import annotations
from pathlib import Path

from cloudy_life.analysis import analyze_period
from cloudy_life.config import default_config
from cloudy_life.geocode import geocode
from cloudy_life.history import fetch_cloud_cover
from cloudy_life.periods import validate_periods
from cloudy_life.report import aggregate
from cloudy_life.utils import LOG_TAG, log_error


def resolve_location(period: dict) -> dict:
    """Use the period's autocomplete coords if present, else geocode its text."""
    if period.get("coords"):
        return period["coords"]
    return geocode(period["location"].strip())


def process_period(period: dict) -> dict:
    """Resolve, fetch and analyze a single period. Returns its summary."""
    location = resolve_location(period)
    observations = fetch_cloud_cover(
        latitude=location["latitude"],
        longitude=location["longitude"],
        start=period["start"],
        end=period["end"],
    )
    return analyze_period(
        observations,
        location_label=location["name"],
        country=location.get("country", ""),
    )


def process_periods(periods: list[dict], verbose: bool = False) -> list[dict]:
    """Return one summary per period, in the user's order."""
    summaries = []
    for i, period in enumerate(periods, start=1):
        if verbose:
            print(f"{LOG_TAG} [{i}/{len(periods)}] {period['location']} "
                  f"{period['start']} → {period['end']}")
        summaries.append(process_period(period))
    return summaries


def build_report(
    periods: list[dict],
    config: dict | None = None,
    verbose: bool = False,
) -> dict:
    """Validate periods, fetch everything and aggregate into one report.

    Raises:
        InvalidPeriodError: If any period fails validation.
        LocationNotFoundError: If a place name cannot be geocoded.
        RuntimeError: If an API call fails after all retries.
    """
    config = config or default_config()
    validate_periods(periods)

    try:
        summaries = process_periods(periods, verbose=verbose)
    except (ValueError, RuntimeError) as e:
        log_error(f"Report aborted: {e}", log_path=Path(config["log"]["path"]))
        raise

    return aggregate(summaries, min_days_per_year=config["report"]["min_days_per_year"])
