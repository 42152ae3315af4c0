# Project: cloudy-life
# Owner: GreenUnicorn
"""
history.py — Fetch historical daily cloud cover from Open-Meteo Archive API.
API docs: https://open-meteo.com/en/docs/historical-weather-api
"""

import requests
from datetime import date
from cloudy_life.utils import with_retry

ARCHIVE_API_URL = "https://archive-api.open-meteo.com/v1/archive"

# Daily mean of total cloud cover, in percent
CLOUD_COVER_VARIABLE = "cloudcover_mean"


def fetch_cloud_cover(
    latitude: float,
    longitude: float,
    start: date,
    end: date,
) -> list[dict]:
    """Fetch daily mean cloud cover between start and end (inclusive).

    Dates are the location's local calendar days (timezone=auto).

    Returns a list of dicts, one per day, with keys:
        date (datetime.date), cloud_cover (float percent, or None if missing)

    Raises RuntimeError if all retries fail or the response has no cloud
    cover data.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "daily": CLOUD_COVER_VARIABLE,
        "timezone": "auto",
    }

    def _call() -> dict:
        r = requests.get(ARCHIVE_API_URL, params=params, timeout=60)
        r.raise_for_status()
        return r.json()

    data = with_retry(_call, label="Open-Meteo historical archive API")
    return _parse_daily(data)


def _parse_daily(data: dict) -> list[dict]:
    """Parse the Open-Meteo archive response into daily observation dicts."""
    daily = data.get("daily") or {}
    if daily.get("time") is None or daily.get(CLOUD_COVER_VARIABLE) is None:
        raise RuntimeError("Weather data is missing cloud cover information")

    dates = daily["time"]
    cover = daily[CLOUD_COVER_VARIABLE]

    records = []
    for i, date_str in enumerate(dates):
        value = cover[i] if i < len(cover) else None
        records.append({
            "date":        date.fromisoformat(date_str),
            "cloud_cover": float(value) if value is not None else None,
        })
    return records
