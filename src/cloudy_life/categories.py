# Project: cloudy-life
# Owner: GreenUnicorn
"""
categories.py — Cloud cover classification, thresholds and the color scale.

Two independent four-way classifications live here:

* CloudCoverCategory (15 / 50 / 85 / 100) — the primary day counts.
* BREAKDOWN_BANDS (30 / 50 / 70) — the finer bands used only for the
  sky conditions bar. They are deliberately different from the categories.
"""

import math
from enum import Enum


class CloudCoverCategory(Enum):
    """Classification of a single day's mean cloud cover percentage."""

    CLEAR_SKY = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    MOSTLY_CLOUDY = "mostly_cloudy"
    OVERCAST = "overcast"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


# Inclusive upper bound of each band, checked in order
CATEGORY_THRESHOLDS: list[tuple[float, CloudCoverCategory]] = [
    (15, CloudCoverCategory.CLEAR_SKY),
    (50, CloudCoverCategory.PARTLY_CLOUDY),
    (85, CloudCoverCategory.MOSTLY_CLOUDY),
    (100, CloudCoverCategory.OVERCAST),
]

CATEGORY_LABELS: dict[CloudCoverCategory, str] = {
    CloudCoverCategory.CLEAR_SKY: "Cloud-free",
    CloudCoverCategory.PARTLY_CLOUDY: "Partly cloudy",
    CloudCoverCategory.MOSTLY_CLOUDY: "Mostly cloudy",
    CloudCoverCategory.OVERCAST: "Overcast",
}

# Sky conditions bar: (label, range text, lower bound inclusive, upper bound exclusive)
BREAKDOWN_BANDS: list[tuple[str, str, float, float]] = [
    ("Clear Skies",   "<30%",   -math.inf, 30),
    ("Partly Cloudy", "30-50%", 30,        50),
    ("Mostly Cloudy", "50-70%", 50,        70),
    ("Overcast",      ">70%",   70,        math.inf),
]

MIN_YEAR = 1970           # earliest start year accepted for a period
MIN_DAYS_PER_YEAR = 5     # a timeline year needs this many days to count
MIN_TOTAL_DAYS = 30       # below this a report is too sparse to present

CLEAR_COLOR: tuple[int, int, int] = (253, 160, 133)   # #fda085 warm orange
CLOUDY_COLOR: tuple[int, int, int] = (85, 102, 119)   # #556677 cool gray


def classify(cloud_cover: float) -> CloudCoverCategory:
    """Return the CloudCoverCategory for a cloud cover percentage.

    Readings above 100 count as overcast, readings below 0 as clear sky.
    """
    for upper, category in CATEGORY_THRESHOLDS:
        if cloud_cover <= upper:
            return category
    return CloudCoverCategory.OVERCAST


def breakdown_band(cloud_cover: float) -> int:
    """Return the index into BREAKDOWN_BANDS for a cloud cover percentage."""
    for i, (_, _, lower, upper) in enumerate(BREAKDOWN_BANDS):
        if lower <= cloud_cover < upper:
            return i
    return len(BREAKDOWN_BANDS) - 1


def scale_position(value: float, min_value: float = 0, max_value: float = 100) -> float:
    """Position of value within [min_value, max_value] as a 0-1 fraction.

    Returns 0.5 when the range is empty (min == max). Out-of-range values
    are clamped.
    """
    span = max_value - min_value
    if span <= 0:
        return 0.5
    t = (value - min_value) / span
    return max(0.0, min(1.0, t))


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def color_for_value(
    value: float,
    min_value: float = 0,
    max_value: float = 100,
) -> tuple[int, int, int]:
    """Interpolate an RGB color between the clear and cloudy endpoints.

    The scale is relative: min_value maps to CLEAR_COLOR and max_value to
    CLOUDY_COLOR, so a report's clearest year anchors the warm end.

    Args:
        value: Average cloud cover to color.
        min_value: Lowest value in the report (clear end).
        max_value: Highest value in the report (cloudy end).

    Returns:
        (r, g, b) tuple of ints in 0-255.
    """
    t = scale_position(value, min_value, max_value)
    return tuple(
        _round_half_up(clear + (cloudy - clear) * t)
        for clear, cloudy in zip(CLEAR_COLOR, CLOUDY_COLOR)
    )


def rgb_string(color: tuple[int, int, int]) -> str:
    """Format an (r, g, b) tuple as a CSS 'rgb(r, g, b)' string."""
    r, g, b = color
    return f"rgb({r}, {g}, {b})"


def report_title(average_cloud_cover: float) -> str:
    """Headline for a report based on its overall average cloud cover."""
    avg = round(average_cloud_cover, 1)
    if avg < 30:
        return "Clear Skies"
    if avg < 45:
        return "Mostly Sunny"
    if avg < 55:
        return "A Balanced Mix"
    if avg < 70:
        return "Mostly Cloudy"
    return "Mostly Overcast"
