"""
Activity aggregation.

Stateless passes over the cached activity list:
- Monthly distance per category
- Monthly pace per category
- Daily pace-zone distance over a date range, with summary
- Training summary filtered by name keywords and dates
- Run totals per tempo marker in activity names

Callers pass in activities read from the cache; nothing here touches
the network or the disk. All sums are meters and seconds; kilometers
appear only in fields named *_km.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from strava_dashboard.features.activities.models import Activity
from strava_dashboard.shared.constants import (
    ActivityCategory,
    PaceZone,
    PACE_ZONE_ACTIVITY_TYPE,
    TEMPO_LABELS,
    TEMPO_MARKERS,
    classify_activity,
    classify_pace_zone,
)
from strava_dashboard.shared.formatters import format_pace, meters_to_km, safe_pace
from .schemas import (
    MonthlyDistanceStats,
    MonthlyPaceStats,
    TempoCategoryStats,
    TrainingSummary,
    WeeklyPaceZoneStats,
    WeeklySummary,
    ZoneDistances,
)

logger = logging.getLogger(__name__)


# Response field prefix per category
CATEGORY_FIELDS: dict[ActivityCategory, str] = {
    ActivityCategory.RUN_WALK_HIKE: "run_walk_hike",
    ActivityCategory.BIKE: "bike",
    ActivityCategory.OTHER: "other",
}


def month_key(activity: Activity) -> Optional[str]:
    """YYYY-MM of the UTC start date, None if the date does not parse."""
    start = activity.start_utc
    if start is None:
        return None
    return start.strftime("%Y-%m")


def _group_by_month(activities: Iterable[Activity]) -> dict[str, list[Activity]]:
    activities = list(activities)
    months: dict[str, list[Activity]] = defaultdict(list)
    for activity in activities:
        key = month_key(activity)
        if key is not None:
            months[key].append(activity)

    if not activities:
        logger.info("No activities in cache; monthly stats are empty")
    elif not months:
        logger.info(
            f"None of {len(activities)} cached activities has a valid start date; "
            "monthly stats are empty"
        )
    return months


# =============================================================================
# Monthly aggregates
# =============================================================================

def monthly_distance_stats(activities: Iterable[Activity]) -> list[MonthlyDistanceStats]:
    """
    Sum distance per category for every month present in the data.

    Months without activities are absent, not zero-filled.
    Order is not significant; sorting is up to the client.
    """
    result = []
    for month, group in _group_by_month(activities).items():
        totals = {field: 0.0 for field in CATEGORY_FIELDS.values()}
        for activity in group:
            field = CATEGORY_FIELDS[classify_activity(activity.type)]
            totals[field] += activity.distance
        result.append(MonthlyDistanceStats(month_year=month, **totals))
    return result


def monthly_pace_stats(activities: Iterable[Activity]) -> list[MonthlyPaceStats]:
    """
    Average pace (seconds per meter) per category and month.

    pace = total moving time / total distance, or 0 when the category
    has no distance that month.
    """
    result = []
    for month, group in _group_by_month(activities).items():
        values: dict[str, float] = {}
        for field in CATEGORY_FIELDS.values():
            values[f"{field}_time"] = 0.0
            values[f"{field}_distance"] = 0.0

        for activity in group:
            field = CATEGORY_FIELDS[classify_activity(activity.type)]
            values[f"{field}_time"] += activity.moving_time
            values[f"{field}_distance"] += activity.distance

        for field in CATEGORY_FIELDS.values():
            values[f"{field}_pace"] = safe_pace(
                values[f"{field}_time"], values[f"{field}_distance"]
            )

        result.append(MonthlyPaceStats(month_year=month, **values))
    return result


# =============================================================================
# Pace zones over a date range
# =============================================================================

def current_week(today: Optional[date] = None) -> tuple[date, date]:
    """Monday and Sunday of the week containing `today` (UTC by default)."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def _days(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def weekly_pace_zone_stats(
    activities: Iterable[Activity],
    start: date,
    end: date
) -> WeeklyPaceZoneStats:
    """
    Kilometers per pace zone for each day in [start, end].

    Every day in the range is present, zero-filled if nothing was run.
    Only runs with positive distance and moving time count, placed on
    the day of their local start time.

    Raises:
        ValueError: If start is after end
    """
    if start > end:
        raise ValueError(f"start date {start} is after end date {end}")

    per_day: dict[date, dict[PaceZone, float]] = {
        day: {zone: 0.0 for zone in PaceZone} for day in _days(start, end)
    }
    total_distance = 0.0
    total_time = 0.0

    for activity in activities:
        if activity.type != PACE_ZONE_ACTIVITY_TYPE:
            continue
        if activity.distance <= 0 or activity.moving_time <= 0:
            continue

        local_start = activity.start_local
        if local_start is None:
            continue
        day = local_start.date()
        if day not in per_day:
            continue

        zone = classify_pace_zone(activity.distance / activity.moving_time)
        per_day[day][zone] += meters_to_km(activity.distance)
        total_distance += activity.distance
        total_time += activity.moving_time

    return WeeklyPaceZoneStats(
        start_date=start,
        end_date=end,
        pace_data={
            day.isoformat(): ZoneDistances(**{zone.value: km for zone, km in zones.items()})
            for day, zones in per_day.items()
        },
        summary=WeeklySummary(
            total_distance_km=meters_to_km(total_distance),
            total_moving_time_seconds=total_time,
            average_pace_sec_per_m=safe_pace(total_time, total_distance),
        ),
    )


# =============================================================================
# Training summary
# =============================================================================

def parse_keywords(keywords: Optional[str], case_sensitive: bool = False) -> list[str]:
    """Split a comma-separated keyword string, dropping blanks."""
    if not keywords:
        return []
    terms = [term.strip() for term in keywords.split(",")]
    if not case_sensitive:
        terms = [term.lower() for term in terms]
    return [term for term in terms if term]


def training_summary(
    activities: Iterable[Activity],
    keywords: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    case_sensitive: bool = False
) -> TrainingSummary:
    """
    Totals for activities whose name contains any keyword.

    The date range is inclusive and applied to the UTC start date;
    with a range set, activities without a valid date are left out.
    """
    terms = parse_keywords(keywords, case_sensitive)

    selected = []
    for activity in activities:
        if terms:
            name = activity.name if case_sensitive else activity.name.lower()
            if not any(term in name for term in terms):
                continue

        if start is not None or end is not None:
            started = activity.start_utc
            if started is None:
                continue
            if start is not None and started.date() < start:
                continue
            if end is not None and started.date() > end:
                continue

        selected.append(activity)

    total_distance = sum(a.distance for a in selected)
    total_time = sum(a.moving_time for a in selected)
    count = len(selected)
    pace = safe_pace(total_time, total_distance)

    return TrainingSummary(
        keywords=terms,
        start_date=start,
        end_date=end,
        total_activities=count,
        total_distance_km=meters_to_km(total_distance),
        total_moving_time_seconds=total_time,
        average_distance_km=meters_to_km(total_distance) / count if count else 0.0,
        average_pace_sec_per_m=pace,
        average_pace=format_pace(pace),
    )


# =============================================================================
# Tempo categories
# =============================================================================

def tempo_category_stats(activities: Iterable[Activity]) -> list[TempoCategoryStats]:
    """
    Run totals per tempo marker, fastest first.

    Runs are grouped by the colored marker in their name. All four
    categories are always returned. Heart rate is averaged over the
    runs that recorded one (average_heartrate > 0).
    """
    totals = {
        zone: {"count": 0, "distance": 0.0, "time": 0.0, "hr_sum": 0.0, "hr_count": 0}
        for zone in PaceZone
    }

    for activity in activities:
        if activity.type != PACE_ZONE_ACTIVITY_TYPE:
            continue
        for zone, marker in TEMPO_MARKERS.items():
            if marker not in activity.name:
                continue
            bucket = totals[zone]
            bucket["count"] += 1
            bucket["distance"] += activity.distance
            bucket["time"] += activity.moving_time
            if activity.average_heartrate:
                bucket["hr_sum"] += activity.average_heartrate
                bucket["hr_count"] += 1

    result = []
    for zone, bucket in totals.items():
        pace = safe_pace(bucket["time"], bucket["distance"])
        result.append(TempoCategoryStats(
            zone=zone.value,
            marker=TEMPO_MARKERS[zone],
            label=TEMPO_LABELS[zone],
            activity_count=bucket["count"],
            total_distance_km=meters_to_km(bucket["distance"]),
            total_moving_time_seconds=bucket["time"],
            average_pace_sec_per_m=pace,
            average_pace=format_pace(pace),
            average_heartrate=(
                bucket["hr_sum"] / bucket["hr_count"] if bucket["hr_count"] else 0.0
            ),
        ))
    return result
