# Project: cloudy-life
# Owner: GreenUnicorn
"""
geocode.py — Look up coordinates for a place name using Open-Meteo Geocoding API.

Free, no API key required.
API docs: https://open-meteo.com/en/docs/geocoding-api
"""

import requests
from cloudy_life.utils import with_retry

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
MIN_QUERY_LENGTH = 2


class LocationNotFoundError(ValueError):
    """Raised when the geocoding API has no match for a place name."""


def _search(name: str, count: int) -> list[dict]:
    params = {
        "name": name,
        "count": count,
        "language": "en",
        "format": "json",
    }

    def _call():
        r = requests.get(GEOCODING_URL, params=params, timeout=10)
        r.raise_for_status()
        return r.json()

    data = with_retry(_call, label=f"Geocoding API for '{name}'")
    return data.get("results") or []


def _to_location(result: dict) -> dict:
    """Convert one raw geocoding result into a location dict.

    display_name is 'City, Region, Country' (region omitted when absent);
    name is the bare city name used as the period's label.
    """
    name = result.get("name", "")
    country = result.get("country") or ""
    parts = [name]
    if result.get("admin1"):
        parts.append(result["admin1"])
    if country:
        parts.append(country)

    return {
        "name": name,
        "country": country,
        "latitude": result["latitude"],
        "longitude": result["longitude"],
        "display_name": ", ".join(parts),
    }


def geocode(place: str) -> dict:
    """Look up coordinates for a place name using Open-Meteo Geocoding.

    Args:
        place: Human-readable place name, e.g. 'Tokyo' or 'London'.

    Returns:
        Dict with keys: name, country, latitude, longitude, display_name.

    Raises:
        LocationNotFoundError: If no results are found for the place name.
        RuntimeError: If all API retry attempts fail.
    """
    results = _search(place, count=1)
    if not results:
        raise LocationNotFoundError(
            f'Location "{place}" not found. Please try a different city name.'
        )
    return _to_location(results[0])


def search_locations(query: str, count: int = 5) -> list[dict]:
    """Return up to *count* location suggestions for a partial place name.

    Queries shorter than MIN_QUERY_LENGTH characters return an empty list
    without calling the API.

    Raises:
        RuntimeError: If all API retry attempts fail.
    """
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []
    return [_to_location(r) for r in _search(query, count=count)]
