# Project: cloudy-life
# Owner: GreenUnicorn
"""
test_geocode.py — Unit tests for geocode.py.

All tests mock with_retry — no real network calls.
"""

import pytest

from cloudy_life.geocode import LocationNotFoundError, geocode, search_locations


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_geocode_response(results: list) -> dict:
    return {"results": results} if results else {}


def _make_result(name="Tokyo", admin1="Tokyo", country="Japan", lat=35.6895, lon=139.6917) -> dict:
    return {
        "name": name,
        "admin1": admin1,
        "country": country,
        "latitude": lat,
        "longitude": lon,
    }


# ---------------------------------------------------------------------------
# geocode — successful cases
# ---------------------------------------------------------------------------

def test_geocode_returns_coordinates_and_name(monkeypatch):
    payload = _make_geocode_response([_make_result()])
    monkeypatch.setattr("cloudy_life.geocode.with_retry", lambda fn, **kw: payload)

    result = geocode("Tokyo")

    assert result["latitude"] == pytest.approx(35.6895)
    assert result["longitude"] == pytest.approx(139.6917)
    assert result["name"] == "Tokyo"
    assert result["country"] == "Japan"


def test_geocode_display_name_includes_region_and_country(monkeypatch):
    payload = _make_geocode_response([_make_result(name="London", admin1="England", country="United Kingdom")])
    monkeypatch.setattr("cloudy_life.geocode.with_retry", lambda fn, **kw: payload)

    result = geocode("London")

    assert result["display_name"] == "London, England, United Kingdom"
    # The bare city name is what labels the period
    assert result["name"] == "London"


def test_geocode_display_name_without_admin1(monkeypatch):
    """If admin1 is null, the display name is City, Country."""
    raw = _make_result()
    raw["admin1"] = None
    monkeypatch.setattr("cloudy_life.geocode.with_retry", lambda fn, **kw: {"results": [raw]})

    result = geocode("Tokyo")

    assert "None" not in result["display_name"]
    assert result["display_name"] == "Tokyo, Japan"


def test_geocode_uses_first_result_only(monkeypatch):
    """geocode must only use results[0], ignoring subsequent matches."""
    payload = _make_geocode_response([
        _make_result(name="Paris", admin1="Île-de-France", country="France", lat=48.8566, lon=2.3522),
        _make_result(name="Paris", admin1="Texas", country="United States", lat=33.6609, lon=-95.5555),
    ])
    monkeypatch.setattr("cloudy_life.geocode.with_retry", lambda fn, **kw: payload)

    result = geocode("Paris")

    assert result["latitude"] == pytest.approx(48.8566)


# ---------------------------------------------------------------------------
# geocode — not found
# ---------------------------------------------------------------------------

def test_geocode_raises_location_not_found_when_empty_results(monkeypatch):
    monkeypatch.setattr(
        "cloudy_life.geocode.with_retry",
        lambda fn, **kw: {"results": []},
    )
    with pytest.raises(LocationNotFoundError, match="not found"):
        geocode("xyznonexistent")


def test_geocode_raises_location_not_found_when_no_results_key(monkeypatch):
    monkeypatch.setattr(
        "cloudy_life.geocode.with_retry",
        lambda fn, **kw: {},
    )
    with pytest.raises(LocationNotFoundError, match='"xyznonexistent"'):
        geocode("xyznonexistent")


def test_location_not_found_is_value_error():
    """LocationNotFoundError must be a subclass of ValueError."""
    assert issubclass(LocationNotFoundError, ValueError)


# ---------------------------------------------------------------------------
# search_locations
# ---------------------------------------------------------------------------

def test_search_returns_every_suggestion(monkeypatch):
    payload = _make_geocode_response([
        _make_result(name="London", admin1="England", country="United Kingdom"),
        _make_result(name="London", admin1="Ontario", country="Canada"),
    ])
    monkeypatch.setattr("cloudy_life.geocode.with_retry", lambda fn, **kw: payload)

    results = search_locations("Lond")

    assert [r["display_name"] for r in results] == [
        "London, England, United Kingdom",
        "London, Ontario, Canada",
    ]


def test_search_short_query_skips_api(monkeypatch):
    """A single character returns no suggestions without a network call."""
    def _fail(fn, **kw):
        pytest.fail("with_retry should not be called for a short query")

    monkeypatch.setattr("cloudy_life.geocode.with_retry", _fail)

    assert search_locations("L") == []
    assert search_locations("  ") == []


def test_search_no_matches_is_empty_list(monkeypatch):
    monkeypatch.setattr("cloudy_life.geocode.with_retry", lambda fn, **kw: {})
    assert search_locations("Qwzx") == []


def test_search_propagates_api_failure(monkeypatch):
    def _raise(fn, **kw):
        raise RuntimeError("All 3 attempts failed for Geocoding API")

    monkeypatch.setattr("cloudy_life.geocode.with_retry", _raise)

    with pytest.raises(RuntimeError):
        search_locations("London")
