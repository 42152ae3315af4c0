# Project: cloudy-life
# Owner: GreenUnicorn
"""
report.py — Merge per-period summaries into one lifetime report.

The combined average is day-weighted: each period contributes
average × days, never a plain mean of the period averages.
"""

from __future__ import annotations
from collections import Counter

from cloudy_life.analysis import _ratio, category_totals
from cloudy_life.categories import (
    BREAKDOWN_BANDS,
    MIN_DAYS_PER_YEAR,
    MIN_TOTAL_DAYS,
    CloudCoverCategory,
    breakdown_band,
    report_title,
)


def merge_yearly(summaries: list[dict]) -> list[dict]:
    """Fold every period's per-year tuples into one list sorted by year.

    Returns list of dicts with keys:
        year, average_cloud_cover (day-weighted), days,
        locations (distinct labels in first-seen order)
    """
    by_year: dict[int, dict] = {}
    for summary in summaries:
        for entry in summary.get("yearly", []):
            acc = by_year.setdefault(
                entry["year"], {"weighted": 0.0, "days": 0, "locations": []}
            )
            acc["weighted"] += entry["average_cloud_cover"] * entry["days"]
            acc["days"] += entry["days"]
            location = entry.get("location")
            if location and location not in acc["locations"]:
                acc["locations"].append(location)

    return [
        {
            "year":                year,
            "average_cloud_cover": _ratio(by_year[year]["weighted"], by_year[year]["days"]),
            "days":                by_year[year]["days"],
            "locations":           by_year[year]["locations"],
        }
        for year in sorted(by_year)
    ]


def build_timeline(yearly: list[dict], min_days_per_year: int = MIN_DAYS_PER_YEAR) -> list[dict]:
    """Expand merged yearly data into a continuous year-by-year timeline.

    The span runs from the first to the last year with at least
    min_days_per_year days, so a partial year at either end is left out.
    Inside the span, years below the threshold are kept but flagged with
    sufficient=False; years with no data at all have days=0. When no year
    reaches the threshold the span covers every year with data.
    """
    if not yearly:
        return []

    by_year = {y["year"]: y for y in yearly}
    span = [y["year"] for y in yearly if y["days"] >= min_days_per_year] or list(by_year)
    first, last = min(span), max(span)

    timeline = []
    for year in range(first, last + 1):
        entry = by_year.get(year)
        if entry is None:
            entry = {"year": year, "average_cloud_cover": 0.0, "days": 0, "locations": []}
        timeline.append({**entry, "sufficient": entry["days"] >= min_days_per_year})
    return timeline


def color_range(timeline: list[dict]) -> tuple[float, float] | None:
    """Min and max average cloud cover among sufficient years, or None."""
    values = [y["average_cloud_cover"] for y in timeline if y["sufficient"]]
    if not values:
        return None
    return min(values), max(values)


def fine_breakdown(daily: list[dict], total_days: int) -> list[dict]:
    """Count days in each BREAKDOWN_BANDS band.

    Returns list of 4 dicts with keys: label, range, days, percentage.
    """
    counts = Counter(breakdown_band(d["cloud_cover"]) for d in daily)
    return [
        {
            "label":      label,
            "range":      range_text,
            "days":       counts.get(i, 0),
            "percentage": _ratio(counts.get(i, 0) * 100, total_days),
        }
        for i, (label, range_text, _, _) in enumerate(BREAKDOWN_BANDS)
    ]


def aggregate(summaries: list[dict], min_days_per_year: int = MIN_DAYS_PER_YEAR) -> dict:
    """Combine per-period summaries (in the user's order) into one report.

    Returns a dict with keys:
        total_days, average_cloud_cover, the four *_days and *_percentage
        category keys, yearly (merged, data years only), timeline (every
        year in the span, gaps flagged), color_range, breakdown,
        periods (the input summaries), daily (all valid observations)
    """
    total_days = sum(s["total_days"] for s in summaries)
    weighted = sum(s["average_cloud_cover"] * s["total_days"] for s in summaries)

    counts = {
        category: sum(s.get(f"{category.value}_days", 0) for s in summaries)
        for category in CloudCoverCategory
    }

    daily = [d for s in summaries for d in s.get("daily", [])]
    yearly = merge_yearly(summaries)
    timeline = build_timeline(yearly, min_days_per_year)

    return {
        "total_days":          total_days,
        "average_cloud_cover": _ratio(weighted, total_days),
        **category_totals(counts, total_days),
        "yearly":              yearly,
        "timeline":            timeline,
        "color_range":         color_range(timeline),
        "breakdown":           fine_breakdown(daily, total_days),
        "periods":             list(summaries),
        "daily":               daily,
    }


def is_reliable(report: dict, min_total_days: int = MIN_TOTAL_DAYS) -> bool:
    """True when the report has enough days to present as a statistic."""
    return report["total_days"] >= min_total_days


def period_phrase(report: dict) -> str:
    """'in London, United Kingdom' for one period, 'across N locations' otherwise."""
    periods = report["periods"]
    if len(periods) == 1:
        only = periods[0]
        if only.get("country"):
            return f"in {only['location']}, {only['country']}"
        return f"in {only['location']}"
    return f"across {len(periods)} locations"


def fun_fact(report: dict) -> str:
    """A couple of narrative sentences about the report."""
    avg = report["average_cloud_cover"]
    clear = report["clear_days"]
    overcast = report["overcast_days"]
    facts = []

    if avg < 30:
        facts.append(
            f"You've lived under remarkably clear skies! With only {avg:.1f}% average "
            f"cloud cover, you've experienced {clear:,} completely cloud-free days."
        )
    elif avg > 70:
        facts.append(
            f"You've lived under predominantly overcast skies with {avg:.1f}% average "
            f"cloud cover. That's {overcast:,} totally cloudy days!"
        )
    else:
        facts.append(
            f"With {avg:.1f}% average cloud cover, you've experienced a balanced mix "
            f"of sky conditions throughout your life."
        )

    if clear > 0 and overcast > clear * 2:
        facts.append(f"You've had {overcast / clear:.1f}x more totally cloudy days than cloud-free days!")
    elif overcast > 0 and clear > overcast * 2:
        facts.append(f"You've enjoyed {clear / overcast:.1f}x more cloud-free days than totally cloudy ones!")

    years = report["total_days"] / 365.25
    facts.append(
        f"That's {years:.1f} years of weather history analyzed across {report['total_days']:,} days."
    )
    return " ".join(facts)


def terminal_summary(report: dict, min_total_days: int = MIN_TOTAL_DAYS) -> str:
    """Return a formatted multi-line terminal summary string.

    Example:
        ☁️  Mostly Cloudy — 62.3% average cloud cover
        ──────────────────────────────────────────────────────────────
        📅  12,410 days analyzed across 3 locations
        ...
    """
    sep = "─" * 62
    if not is_reliable(report, min_total_days):
        return (
            "Insufficient data to generate reliable results. Please ensure your "
            f"date range includes at least {min_total_days} days of data."
        )

    avg = report["average_cloud_cover"]
    lines = [
        f"☁️  {report_title(avg)} — {avg:.1f}% average cloud cover",
        sep,
        f"📅  {report['total_days']:,} days analyzed {period_phrase(report)}",
        "",
    ]
    for category in CloudCoverCategory:
        days = report[f"{category.value}_days"]
        pct = report[f"{category.value}_percentage"]
        lines.append(f"    {category.label:<14} {days:>7,} days  ({pct:4.1f}%)")

    sufficient = [y for y in report["timeline"] if y["sufficient"]]
    if sufficient:
        clearest = min(sufficient, key=lambda y: y["average_cloud_cover"])
        cloudiest = max(sufficient, key=lambda y: y["average_cloud_cover"])
        lines += [
            "",
            f"☀️  Clearest year:      {clearest['year']} ({clearest['average_cloud_cover']:.1f}%"
            f" in {', '.join(clearest['locations'])})",
            f"🌥  Cloudiest year:     {cloudiest['year']} ({cloudiest['average_cloud_cover']:.1f}%"
            f" in {', '.join(cloudiest['locations'])})",
        ]

    gaps = [y["year"] for y in report["timeline"] if not y["sufficient"]]
    if gaps:
        lines.append(f"⚠️  Insufficient data:  {', '.join(str(y) for y in gaps)}")

    lines += ["", fun_fact(report), sep]
    return "\n".join(lines)
