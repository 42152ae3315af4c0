# Project: cloudy-life
# Owner: GreenUnicorn
"""Tests for analysis.py — analyze_period and category_totals."""

import pytest
from datetime import date, timedelta

from cloudy_life.analysis import analyze_period, category_totals
from cloudy_life.categories import CloudCoverCategory


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _obs(d: date, cover):
    return {"date": d, "cloud_cover": cover}


def _series(start: date, values: list) -> list[dict]:
    return [_obs(start + timedelta(days=i), v) for i, v in enumerate(values)]


CATEGORY_KEYS = ["clear_days", "partly_cloudy_days", "mostly_cloudy_days", "overcast_days"]


# ---------------------------------------------------------------------------
# Empty / missing data
# ---------------------------------------------------------------------------

class TestZeroData:

    def setup_method(self):
        self.summary = analyze_period([], "X")

    def test_total_days_is_zero(self):
        assert self.summary["total_days"] == 0

    def test_average_is_zero_sentinel(self):
        """No division fault: the average is 0 when there are no days."""
        assert self.summary["average_cloud_cover"] == 0

    def test_all_counts_and_percentages_zero(self):
        for key in CATEGORY_KEYS:
            assert self.summary[key] == 0
        for category in CloudCoverCategory:
            assert self.summary[f"{category.value}_percentage"] == 0

    def test_yearly_is_empty(self):
        assert self.summary["yearly"] == []
        assert self.summary["daily"] == []

    def test_only_missing_values_is_zero_summary(self):
        """A series where every reading is missing behaves like an empty one."""
        summary = analyze_period(_series(date(2020, 1, 1), [None, None, None]), "X")
        assert summary["total_days"] == 0
        assert summary["average_cloud_cover"] == 0
        assert summary["yearly"] == []


class TestMissingValues:

    def setup_method(self):
        # 6 entries, 2 missing
        values = [20.0, None, 40.0, 60.0, None, 80.0]
        self.summary = analyze_period(_series(date(2021, 3, 1), values), "Oslo")

    def test_missing_entries_excluded_from_total(self):
        """M=6 entries with N=2 missing gives total_days = 4."""
        assert self.summary["total_days"] == 4

    def test_missing_entries_excluded_from_average(self):
        """Average is over the valid values only: (20+40+60+80)/4 = 50."""
        assert self.summary["average_cloud_cover"] == pytest.approx(50.0)

    def test_missing_entries_excluded_from_years(self):
        assert self.summary["yearly"][0]["days"] == 4

    def test_daily_keeps_only_valid_readings(self):
        assert [d["cloud_cover"] for d in self.summary["daily"]] == [20.0, 40.0, 60.0, 80.0]

    def test_partition_property(self):
        assert sum(self.summary[k] for k in CATEGORY_KEYS) == self.summary["total_days"]


# ---------------------------------------------------------------------------
# End-to-end: one London period crossing a year boundary
# ---------------------------------------------------------------------------

class TestLondonScenario:

    def setup_method(self):
        # 30 days 2019-12-02 .. 2019-12-31 at 10%, then 30 days 2020-01-01 .. 2020-01-30 at 90%
        values = [10.0] * 30 + [90.0] * 30
        self.summary = analyze_period(_series(date(2019, 12, 2), values), "London", "United Kingdom")

    def test_totals(self):
        assert self.summary["total_days"] == 60
        assert self.summary["clear_days"] == 30
        assert self.summary["overcast_days"] == 30
        assert self.summary["partly_cloudy_days"] == 0
        assert self.summary["mostly_cloudy_days"] == 0

    def test_average(self):
        assert self.summary["average_cloud_cover"] == pytest.approx(50.0)

    def test_percentages(self):
        assert self.summary["clear_percentage"] == pytest.approx(50.0)
        assert self.summary["overcast_percentage"] == pytest.approx(50.0)

    def test_year_split(self):
        """The 60 days split 30/30 across 2019 and 2020."""
        yearly = self.summary["yearly"]
        assert [y["year"] for y in yearly] == [2019, 2020]
        assert yearly[0]["days"] == 30
        assert yearly[0]["average_cloud_cover"] == pytest.approx(10.0)
        assert yearly[1]["days"] == 30
        assert yearly[1]["average_cloud_cover"] == pytest.approx(90.0)

    def test_location_attached_to_every_year(self):
        assert all(y["location"] == "London" for y in self.summary["yearly"])

    def test_location_and_country_kept(self):
        assert self.summary["location"] == "London"
        assert self.summary["country"] == "United Kingdom"


# ---------------------------------------------------------------------------
# Other behaviour
# ---------------------------------------------------------------------------

def test_yearly_sorted_even_when_input_is_not():
    """Years come out ascending regardless of observation order."""
    observations = [
        _obs(date(2005, 6, 1), 30.0),
        _obs(date(2003, 6, 1), 50.0),
        _obs(date(2004, 6, 1), 70.0),
    ]
    summary = analyze_period(observations, "Lima")
    assert [y["year"] for y in summary["yearly"]] == [2003, 2004, 2005]


def test_year_keys():
    summary = analyze_period(_series(date(2010, 1, 1), [40.0]), "Rome")
    assert set(summary["yearly"][0].keys()) == {"year", "average_cloud_cover", "days", "location"}


def test_every_boundary_day_counted_once():
    """One reading per boundary value lands in exactly one category each."""
    values = [15.0, 15.01, 50.0, 50.01, 85.0, 85.01]
    summary = analyze_period(_series(date(2012, 5, 1), values), "Boundary")
    assert summary["clear_days"] == 1
    assert summary["partly_cloudy_days"] == 2
    assert summary["mostly_cloudy_days"] == 2
    assert summary["overcast_days"] == 1
    assert sum(summary[k] for k in CATEGORY_KEYS) == summary["total_days"] == 6


def test_integer_readings_are_accepted():
    summary = analyze_period(_series(date(2012, 5, 1), [0, 100]), "Ints")
    assert summary["average_cloud_cover"] == pytest.approx(50.0)
    assert isinstance(summary["daily"][0]["cloud_cover"], float)


def test_category_totals_zero_days():
    totals = category_totals({}, 0)
    assert totals["clear_days"] == 0
    assert totals["overcast_percentage"] == 0


def test_category_totals_percentages():
    counts = {CloudCoverCategory.CLEAR_SKY: 1, CloudCoverCategory.OVERCAST: 3}
    totals = category_totals(counts, 4)
    assert totals["clear_percentage"] == pytest.approx(25.0)
    assert totals["overcast_percentage"] == pytest.approx(75.0)
    assert totals["partly_cloudy_days"] == 0
