# Project: cloudy-life
# Owner: GreenUnicorn
"""
analysis.py — Per-period statistics over daily cloud cover observations.

Pure functions, standard library only. Any ratio whose denominator is a
day count is 0 when that count is 0 (see _ratio).
"""

from __future__ import annotations
from collections import defaultdict

from cloudy_life.categories import CloudCoverCategory, classify


def _ratio(numerator: float, days: int) -> float:
    """numerator / days, or 0.0 when there are no days."""
    return numerator / days if days > 0 else 0.0


def category_totals(counts: dict[CloudCoverCategory, int], total_days: int) -> dict:
    """Flatten per-category counts into *_days and *_percentage keys.

    Keys use the category value, e.g. clear_days, clear_percentage,
    overcast_days, overcast_percentage.
    """
    result = {}
    for category in CloudCoverCategory:
        result[f"{category.value}_days"] = counts.get(category, 0)
    for category in CloudCoverCategory:
        result[f"{category.value}_percentage"] = _ratio(
            counts.get(category, 0) * 100, total_days
        )
    return result


def analyze_period(
    observations: list[dict],
    location_label: str = "",
    country: str = "",
) -> dict:
    """Summarise one period's daily observations.

    Input observations have keys: date (datetime.date) and cloud_cover
    (float percentage, or None when the reading is missing). Missing
    readings are skipped everywhere.

    Returns a dict with keys:
        location, country, total_days, average_cloud_cover,
        clear_days, partly_cloudy_days, mostly_cloudy_days, overcast_days,
        clear_percentage, partly_cloudy_percentage,
        mostly_cloudy_percentage, overcast_percentage,
        yearly (list of {year, average_cloud_cover, days, location}, sorted
        by year), daily (the valid observations, in input order)
    """
    total_days = 0
    total_cover = 0.0
    counts: dict[CloudCoverCategory, int] = defaultdict(int)
    by_year: dict[int, list[float]] = defaultdict(lambda: [0.0, 0])
    daily = []

    for obs in observations:
        cover = obs.get("cloud_cover")
        if cover is None:
            continue
        cover = float(cover)

        total_days += 1
        total_cover += cover
        counts[classify(cover)] += 1

        acc = by_year[obs["date"].year]
        acc[0] += cover
        acc[1] += 1

        daily.append({"date": obs["date"], "cloud_cover": cover})

    yearly = [
        {
            "year":               year,
            "average_cloud_cover": _ratio(by_year[year][0], by_year[year][1]),
            "days":               by_year[year][1],
            "location":           location_label,
        }
        for year in sorted(by_year)
    ]

    return {
        "location":            location_label,
        "country":             country,
        "total_days":          total_days,
        "average_cloud_cover": _ratio(total_cover, total_days),
        **category_totals(counts, total_days),
        "yearly":              yearly,
        "daily":               daily,
    }
