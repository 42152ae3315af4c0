# Project: cloudy-life
# Owner: GreenUnicorn
"""
chart.py — ASCII rendering of a lifetime report for the terminal.

Uses only the Python standard library (os).
All rendering functions return strings ready to print.
"""

import os

from cloudy_life.categories import scale_position

FALLBACK_TERMINAL_WIDTH: int = 80
BAR_LABEL_RESERVE: int = 30  # characters reserved for label + value outside the bar

# One fill character per breakdown band, clear → overcast
BAND_CHARS = ["░", "▒", "▓", "█"]
# Timeline shades from the clearest year to the cloudiest year
SHADES = ["░", "▒", "▓", "█"]
GAP_CHAR = "·"


def _terminal_bar_width() -> int:
    try:
        terminal_width = os.get_terminal_size().columns
    except OSError:
        terminal_width = FALLBACK_TERMINAL_WIDTH
    return max(10, terminal_width - BAR_LABEL_RESERVE)


def _bar(value: float, max_value: float, bar_width: int) -> str:
    """Render a single filled/empty bar scaled to bar_width.

    Args:
        value: The data value to represent.
        max_value: The maximum value (maps to full bar width).
        bar_width: Total character width of the bar.

    Returns:
        String of '█' and '░' characters of length bar_width.
    """
    if max_value == 0:
        filled = 0
    else:
        filled = round((value / max_value) * bar_width)
    filled = max(0, min(filled, bar_width))
    return "█" * filled + "░" * (bar_width - filled)


def render_bar_chart(
    labels: list[str],
    values: list[float | None],
    title: str,
    unit: str = "",
    bar_width: int | None = None,
    max_value: float | None = None,
) -> str:
    """Render a labelled horizontal bar chart.

    A value of None renders as an empty row marked 'no data'.

    Args:
        labels: List of row label strings.
        values: Numeric values corresponding to each label (or None).
        title: Chart title printed above the bars.
        unit: Optional unit suffix appended to each value (e.g. '%').
        bar_width: Width of the bar in characters. Auto-detected from terminal if None.
        max_value: Value that maps to a full bar. Defaults to the largest value.

    Returns:
        Multi-line string containing the chart.
    """
    if bar_width is None:
        bar_width = _terminal_bar_width()

    present = [v for v in values if v is not None]
    if max_value is None:
        max_value = max(present) if present else 1
    if max_value == 0:
        max_value = 1  # avoid division by zero

    label_w = max(len(lbl) for lbl in labels) if labels else 3
    lines = [title]
    for label, value in zip(labels, values):
        if value is None:
            lines.append(f"  {label:<{label_w}} │{GAP_CHAR * bar_width}│ no data")
            continue
        bar = _bar(value, max_value, bar_width)
        val_str = f"{value:.1f}{unit}"
        lines.append(f"  {label:<{label_w}} │{bar}│ {val_str:>6}")

    return "\n".join(lines)


def render_breakdown_bar(breakdown: list[dict], bar_width: int | None = None) -> str:
    """Render the four-band sky conditions breakdown as one stacked bar.

    Args:
        breakdown: List of band dicts (label, range, days, percentage) from
            report.fine_breakdown.
        bar_width: Width of the stacked bar. Auto-detected from terminal if None.

    Returns:
        Multi-line string: title, stacked bar and one legend row per band.
    """
    if bar_width is None:
        bar_width = _terminal_bar_width()

    # The last band with days takes the rounding remainder
    last_filled = max((i for i, band in enumerate(breakdown) if band["days"]), default=None)

    segments = []
    used = 0
    for i, band in enumerate(breakdown):
        if i == last_filled:
            width = bar_width - used
        elif band["days"]:
            width = round(band["percentage"] / 100 * bar_width)
        else:
            width = 0
        width = max(0, min(width, bar_width - used))
        used += width
        segments.append(BAND_CHARS[i % len(BAND_CHARS)] * width)

    lines = ["Sky Conditions Breakdown", "  " + "".join(segments)]
    for i, band in enumerate(breakdown):
        char = BAND_CHARS[i % len(BAND_CHARS)]
        lines.append(
            f"  {char} {band['label']:<14} {band['range']:>7}  "
            f"{band['percentage']:5.1f}%  {band['days']:>7,} days"
        )
    return "\n".join(lines)


def _shade(value: float, value_range: tuple[float, float]) -> str:
    t = scale_position(value, *value_range)
    index = min(int(t * len(SHADES)), len(SHADES) - 1)
    return SHADES[index]


def render_timeline(timeline: list[dict], value_range: tuple[float, float] | None) -> str:
    """Render the year-by-year timeline as a single stripe, one char per year.

    Sufficient years are shaded relative to value_range (clearest year
    lightest); insufficient and empty years render as GAP_CHAR.

    Returns:
        Multi-line string, or a short message when there is nothing to show.
    """
    if not timeline:
        return "No data available"
    if value_range is None:
        return "Insufficient data per year"

    stripe = "".join(
        _shade(y["average_cloud_cover"], value_range) if y["sufficient"] else GAP_CHAR
        for y in timeline
    )
    first, last = str(timeline[0]["year"]), str(timeline[-1]["year"])
    pad = max(1, len(stripe) - len(first) - len(last))
    low, high = value_range

    lines = [
        "Your Lifetime Cloud Timeline",
        f"  {stripe}",
        f"  {first}{' ' * pad}{last}" if len(timeline) > 1 else f"  {first}",
        f"  {SHADES[0]} {low:.1f}% (clearest year)   {SHADES[-1]} {high:.1f}% (cloudiest year)",
    ]
    if any(not y["sufficient"] for y in timeline):
        lines.append(f"  {GAP_CHAR} insufficient data")
    return "\n".join(lines)


def render_yearly_chart(timeline: list[dict], bar_width: int | None = None) -> str:
    """Render average cloud cover per year as a bar chart, gaps included."""
    labels = [str(y["year"]) for y in timeline]
    values = [y["average_cloud_cover"] if y["sufficient"] else None for y in timeline]
    return render_bar_chart(
        labels, values, "Average cloud cover by year", unit="%",
        bar_width=bar_width, max_value=100,
    )
