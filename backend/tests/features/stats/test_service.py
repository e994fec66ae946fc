"""
Tests for activity aggregation.
"""

from datetime import date

import pytest

from strava_dashboard.features.activities import Activity
from strava_dashboard.features.stats import (
    current_week,
    monthly_distance_stats,
    monthly_pace_stats,
    tempo_category_stats,
    training_summary,
    weekly_pace_zone_stats,
)
from strava_dashboard.features.stats.service import parse_keywords


@pytest.fixture
def make_activity(activity_factory):
    """Typed Activity built from the raw factory."""
    def _make(**overrides) -> Activity:
        return Activity.model_validate(activity_factory(**overrides))
    return _make


def _by_month(rows):
    return {row.month_year: row for row in rows}


# =============================================================================
# Monthly distance
# =============================================================================

class TestMonthlyDistance:
    """Tests for monthly_distance_stats."""

    def test_single_month(self, make_activity):
        activities = [
            make_activity(type="Run", distance=10000, start_date="2024-03-05T10:00:00Z"),
            make_activity(type="Hike", distance=8000, start_date="2024-03-12T07:00:00Z"),
            make_activity(type="Ride", distance=40000, start_date="2024-03-20T09:00:00Z"),
            make_activity(type="Swim", distance=2000, start_date="2024-03-21T09:00:00Z"),
        ]

        [row] = monthly_distance_stats(activities)

        assert row.month_year == "2024-03"
        assert row.run_walk_hike == 18000
        assert row.bike == 40000
        assert row.other == 2000

    def test_months_without_activities_absent(self, make_activity):
        activities = [
            make_activity(start_date="2024-01-10T10:00:00Z"),
            make_activity(start_date="2024-03-10T10:00:00Z"),
        ]
        assert set(_by_month(monthly_distance_stats(activities))) == {"2024-01", "2024-03"}

    def test_month_from_utc_start(self, make_activity):
        """Month boundary uses start_date (UTC), not start_date_local."""
        activity = make_activity(
            start_date="2024-03-31T23:30:00Z",
            start_date_local="2024-04-01T05:30:00Z",
        )
        assert monthly_distance_stats([activity])[0].month_year == "2024-03"

    def test_empty(self):
        assert monthly_distance_stats([]) == []

    def test_no_valid_dates(self, make_activity):
        activities = [
            make_activity(start_date=""),
            make_activity(start_date="not-a-date"),
            make_activity(start_date="2024-03-15"),
            make_activity(start_date="2024-W11-5"),
        ]
        assert monthly_distance_stats(activities) == []

    def test_invalid_dates_excluded(self, make_activity):
        """Only full timestamps with an offset are bucketed."""
        activities = [
            make_activity(distance=1000, start_date="garbage"),
            make_activity(distance=1000, start_date="2024-05-15"),
            make_activity(distance=1000, start_date="2024-W20-3"),
            make_activity(distance=1000, start_date="2024-05-15T08:00:00"),
            make_activity(distance=1000, start_date="2024-05-32T08:00:00Z"),
            make_activity(distance=2500, start_date="2024-05-01T08:00:00Z"),
        ]
        [row] = monthly_distance_stats(activities)
        assert row.run_walk_hike == 2500

    def test_distance_conserved(self, make_activity):
        """Sum over all months and categories equals the input total."""
        activities = [
            make_activity(type=t, distance=d, start_date=s)
            for t, d, s in [
                ("Run", 5123.4, "2023-12-31T22:00:00Z"),
                ("Ride", 30250.0, "2024-01-01T06:00:00Z"),
                ("Yoga", 0.0, "2024-01-02T06:00:00Z"),
                ("VirtualRide", 18000.5, "2024-02-14T18:00:00Z"),
                ("Walk", 3200.0, "2024-02-15T18:00:00Z"),
            ]
        ]

        rows = monthly_distance_stats(activities)
        total = sum(r.run_walk_hike + r.bike + r.other for r in rows)

        assert total == pytest.approx(sum(a.distance for a in activities))

    def test_idempotent(self, make_activity):
        activities = [make_activity(), make_activity(type="Ride")]
        assert monthly_distance_stats(activities) == monthly_distance_stats(activities)


# =============================================================================
# Monthly pace
# =============================================================================

class TestMonthlyPace:
    """Tests for monthly_pace_stats."""

    def test_pace_and_totals(self, make_activity):
        activities = [
            make_activity(type="Run", distance=10000, moving_time=3000),
            make_activity(type="Ride", distance=20000, moving_time=3600),
        ]

        [row] = monthly_pace_stats(activities)

        assert row.run_walk_hike_time == 3000
        assert row.run_walk_hike_distance == 10000
        assert row.run_walk_hike_pace == pytest.approx(0.3)
        assert row.bike_pace == pytest.approx(0.18)

    def test_empty_category_is_zero(self, make_activity):
        [row] = monthly_pace_stats([make_activity(type="Run")])

        assert row.bike_time == 0
        assert row.bike_distance == 0
        assert row.bike_pace == 0
        assert row.other_pace == 0

    def test_zero_distance_activity(self, make_activity):
        """Time without distance never produces a division error."""
        [row] = monthly_pace_stats([make_activity(type="Yoga", distance=0, moving_time=3600)])

        assert row.other_time == 3600
        assert row.other_pace == 0

    def test_pace_weighted_by_distance(self, make_activity):
        activities = [
            make_activity(type="Run", distance=10000, moving_time=3000),
            make_activity(type="Run", distance=5000, moving_time=2000),
        ]
        [row] = monthly_pace_stats(activities)
        assert row.run_walk_hike_pace == pytest.approx(5000 / 15000)

    def test_no_valid_dates(self, make_activity):
        assert monthly_pace_stats([make_activity(start_date="??")]) == []


# =============================================================================
# Weekly pace zones
# =============================================================================

class TestWeeklyPaceZones:
    """Tests for weekly_pace_zone_stats."""

    START = date(2024, 3, 11)
    END = date(2024, 3, 17)

    def test_every_day_present(self):
        stats = weekly_pace_zone_stats([], self.START, self.END)

        assert list(stats.pace_data) == [f"2024-03-{d}" for d in range(11, 18)]
        for zones in stats.pace_data.values():
            assert zones.model_dump() == {"Red": 0, "Orange": 0, "Yellow": 0, "Green": 0}
        assert stats.summary.total_distance_km == 0
        assert stats.summary.average_pace_sec_per_m == 0

    def test_single_day_range(self):
        stats = weekly_pace_zone_stats([], self.START, self.START)
        assert list(stats.pace_data) == ["2024-03-11"]

    def test_start_after_end(self):
        with pytest.raises(ValueError):
            weekly_pace_zone_stats([], self.END, self.START)

    def test_zones_by_speed(self, make_activity):
        day = "2024-03-13T07:00:00Z"
        activities = [
            make_activity(distance=10000, moving_time=2000, start_date_local=day),  # 5.0 m/s
            make_activity(distance=8000, moving_time=2000, start_date_local=day),   # 4.0 m/s
            make_activity(distance=6000, moving_time=2000, start_date_local=day),   # 3.0 m/s
            make_activity(distance=5000, moving_time=2000, start_date_local=day),   # 2.5 m/s
        ]

        zones = weekly_pace_zone_stats(activities, self.START, self.END).pace_data["2024-03-13"]

        assert zones.Red == pytest.approx(10.0)
        assert zones.Orange == pytest.approx(8.0)
        assert zones.Yellow == pytest.approx(6.0)
        assert zones.Green == pytest.approx(5.0)

    def test_only_runs_count(self, make_activity):
        day = "2024-03-12T07:00:00Z"
        activities = [
            make_activity(type="Ride", distance=30000, moving_time=3600, start_date_local=day),
            make_activity(type="Walk", distance=4000, moving_time=3000, start_date_local=day),
            make_activity(type="Hike", distance=9000, moving_time=9000, start_date_local=day),
        ]

        stats = weekly_pace_zone_stats(activities, self.START, self.END)

        assert stats.summary.total_distance_km == 0
        assert sum(stats.pace_data["2024-03-12"].model_dump().values()) == 0

    def test_zero_distance_or_time_skipped(self, make_activity):
        day = "2024-03-12T07:00:00Z"
        activities = [
            make_activity(distance=0, moving_time=600, start_date_local=day),
            make_activity(distance=1000, moving_time=0, start_date_local=day),
        ]
        stats = weekly_pace_zone_stats(activities, self.START, self.END)
        assert stats.summary.total_distance_km == 0

    def test_uses_local_day(self, make_activity):
        """A late-evening run counts on the athlete's calendar day."""
        activity = make_activity(
            distance=10000,
            moving_time=3000,
            start_date="2024-03-14T23:30:00Z",
            start_date_local="2024-03-15T05:30:00Z",
        )
        stats = weekly_pace_zone_stats([activity], self.START, self.END)

        assert stats.pace_data["2024-03-15"].Yellow == pytest.approx(10.0)
        assert sum(stats.pace_data["2024-03-14"].model_dump().values()) == 0

    def test_range_is_inclusive(self, make_activity):
        activities = [
            make_activity(start_date_local="2024-03-11T00:00:00Z"),
            make_activity(start_date_local="2024-03-17T23:59:00Z"),
            make_activity(start_date_local="2024-03-18T00:01:00Z"),
            make_activity(start_date_local="2024-03-10T23:59:00Z"),
        ]
        stats = weekly_pace_zone_stats(activities, self.START, self.END)
        assert stats.summary.total_distance_km == pytest.approx(20.0)

    def test_summary(self, make_activity):
        activities = [
            make_activity(distance=10000, moving_time=3000, start_date_local="2024-03-11T07:00:00Z"),
            make_activity(distance=5000, moving_time=1800, start_date_local="2024-03-16T07:00:00Z"),
            make_activity(type="Ride", distance=50000, moving_time=7200,
                          start_date_local="2024-03-16T09:00:00Z"),
        ]

        summary = weekly_pace_zone_stats(activities, self.START, self.END).summary

        assert summary.total_distance_km == pytest.approx(15.0)
        assert summary.total_moving_time_seconds == 4800
        assert summary.average_pace_sec_per_m == pytest.approx(4800 / 15000)

    def test_zone_totals_match_summary(self, make_activity):
        activities = [
            make_activity(distance=d, moving_time=t, start_date_local=s)
            for d, t, s in [
                (12000, 2400, "2024-03-11T06:00:00Z"),
                (7000, 1900, "2024-03-12T06:00:00Z"),
                (3000, 1200, "2024-03-16T06:00:00Z"),
            ]
        ]
        stats = weekly_pace_zone_stats(activities, self.START, self.END)

        zone_total = sum(sum(z.model_dump().values()) for z in stats.pace_data.values())
        assert zone_total == pytest.approx(stats.summary.total_distance_km)


class TestCurrentWeek:
    """Tests for current_week."""

    def test_midweek(self):
        assert current_week(date(2024, 3, 14)) == (date(2024, 3, 11), date(2024, 3, 17))

    def test_monday_and_sunday(self):
        assert current_week(date(2024, 3, 11))[0] == date(2024, 3, 11)
        assert current_week(date(2024, 3, 17))[0] == date(2024, 3, 11)

    def test_default_is_seven_days(self):
        monday, sunday = current_week()
        assert monday.weekday() == 0
        assert (sunday - monday).days == 6


# =============================================================================
# Training summary
# =============================================================================

class TestTrainingSummary:
    """Tests for training_summary."""

    @pytest.fixture
    def activities(self, make_activity):
        return [
            make_activity(name="Tempo run", distance=10000, moving_time=3000,
                          start_date="2024-03-05T07:00:00Z"),
            make_activity(name="Easy Run", distance=6000, moving_time=2400,
                          start_date="2024-03-10T07:00:00Z"),
            make_activity(name="Hill repeats TEMPO", distance=8000, moving_time=2800,
                          start_date="2024-04-02T07:00:00Z"),
            make_activity(name="Commute", type="Ride", distance=12000, moving_time=2400,
                          start_date="2024-03-06T07:00:00Z"),
        ]

    def test_no_filters(self, activities):
        summary = training_summary(activities)

        assert summary.total_activities == 4
        assert summary.total_distance_km == pytest.approx(36.0)
        assert summary.average_distance_km == pytest.approx(9.0)

    def test_keywords_case_insensitive(self, activities):
        summary = training_summary(activities, keywords="tempo")

        assert summary.total_activities == 2
        assert summary.keywords == ["tempo"]
        assert summary.total_distance_km == pytest.approx(18.0)
        assert summary.average_pace_sec_per_m == pytest.approx(5800 / 18000)

    def test_keywords_case_sensitive(self, activities):
        summary = training_summary(activities, keywords="TEMPO", case_sensitive=True)
        assert summary.total_activities == 1

    def test_any_keyword_matches(self, activities):
        summary = training_summary(activities, keywords="easy, commute")
        assert summary.total_activities == 2

    def test_date_range(self, activities):
        summary = training_summary(
            activities, start=date(2024, 3, 1), end=date(2024, 3, 31)
        )
        assert summary.total_activities == 3

    def test_keywords_and_dates(self, activities):
        summary = training_summary(
            activities, keywords="tempo", start=date(2024, 3, 1), end=date(2024, 3, 31)
        )
        assert summary.total_activities == 1
        assert summary.average_pace == "5:00 /km"

    def test_nothing_matches(self, activities):
        summary = training_summary(activities, keywords="marathon")

        assert summary.total_activities == 0
        assert summary.average_distance_km == 0
        assert summary.average_pace_sec_per_m == 0
        assert summary.average_pace == "N/A"

    def test_parse_keywords(self):
        assert parse_keywords(" Tempo, ,Long Run ") == ["tempo", "long run"]
        assert parse_keywords("Tempo", case_sensitive=True) == ["Tempo"]
        assert parse_keywords(None) == []


# =============================================================================
# Tempo categories
# =============================================================================

RED, ORANGE, YELLOW, GREEN = "\U0001F534", "\U0001F7E0", "\U0001F7E1", "\U0001F7E2"


class TestTempoCategoryStats:
    """Tests for tempo_category_stats."""

    def test_all_categories_present(self):
        stats = tempo_category_stats([])

        assert [s.zone for s in stats] == ["Red", "Orange", "Yellow", "Green"]
        for s in stats:
            assert s.activity_count == 0
            assert s.average_pace_sec_per_m == 0
            assert s.average_pace == "N/A"
            assert s.average_heartrate == 0

    def test_grouped_by_marker(self, make_activity):
        activities = [
            make_activity(name=f"{RED} Intervals", distance=8000, moving_time=2000,
                          average_heartrate=170),
            make_activity(name=f"Tempo {RED}", distance=10000, moving_time=3000,
                          average_heartrate=160),
            make_activity(name=f"{GREEN} Recovery", distance=5000, moving_time=2000,
                          average_heartrate=130),
            make_activity(name="Untagged run"),
        ]

        stats = {s.zone: s for s in tempo_category_stats(activities)}

        assert stats["Red"].activity_count == 2
        assert stats["Red"].total_distance_km == pytest.approx(18.0)
        assert stats["Red"].total_moving_time_seconds == 5000
        assert stats["Red"].average_pace_sec_per_m == pytest.approx(5000 / 18000)
        assert stats["Red"].average_heartrate == pytest.approx(165)
        assert stats["Green"].activity_count == 1
        assert stats["Orange"].activity_count == 0
        assert stats["Yellow"].activity_count == 0

    def test_only_runs(self, make_activity):
        activities = [
            make_activity(name=f"{YELLOW} Ride", type="Ride"),
            make_activity(name=f"{YELLOW} Hike", type="Hike"),
        ]
        stats = {s.zone: s for s in tempo_category_stats(activities)}
        assert stats["Yellow"].activity_count == 0

    def test_several_markers_count_in_each(self, make_activity):
        activities = [make_activity(name=f"{ORANGE}{YELLOW} Progression", distance=12000)]

        stats = {s.zone: s for s in tempo_category_stats(activities)}

        assert stats["Orange"].total_distance_km == pytest.approx(12.0)
        assert stats["Yellow"].total_distance_km == pytest.approx(12.0)

    def test_heartrate_only_from_runs_that_recorded_it(self, make_activity):
        activities = [
            make_activity(name=f"{ORANGE} a", average_heartrate=150),
            make_activity(name=f"{ORANGE} b", average_heartrate=None),
            make_activity(name=f"{ORANGE} c", average_heartrate=0),
        ]
        orange = tempo_category_stats(activities)[1]

        assert orange.activity_count == 3
        assert orange.average_heartrate == pytest.approx(150)

    def test_no_heartrate_recorded(self, make_activity):
        activities = [make_activity(name=f"{GREEN} easy", average_heartrate=None)]
        green = tempo_category_stats(activities)[3]

        assert green.activity_count == 1
        assert green.average_heartrate == 0

    def test_zero_distance_pace(self, make_activity):
        activities = [make_activity(name=f"{RED} treadmill", distance=0, moving_time=1800)]
        red = tempo_category_stats(activities)[0]

        assert red.total_moving_time_seconds == 1800
        assert red.average_pace_sec_per_m == 0
        assert red.average_pace == "N/A"
