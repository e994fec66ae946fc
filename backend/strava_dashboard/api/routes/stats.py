"""
Stats Routes

Aggregates computed from the local activity cache only; these
endpoints never call Strava. Handlers are sync because they read
the cache file directly.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from strava_dashboard.api.deps import get_activity_cache, get_settings
from strava_dashboard.config import Settings
from strava_dashboard.features.activities import ActivityCache
from strava_dashboard.features.stats import (
    MonthlyDistanceStats,
    MonthlyPaceStats,
    TempoCategoryStats,
    TrainingSummary,
    WeeklyPaceZoneStats,
    current_week,
    monthly_distance_stats,
    monthly_pace_stats,
    tempo_category_stats,
    training_summary,
    weekly_pace_zone_stats,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=list[MonthlyDistanceStats])
def get_distance_stats(cache: ActivityCache = Depends(get_activity_cache)):
    """Monthly distance per category (meters)."""
    return monthly_distance_stats(cache.read())


@router.get("/pace-stats", response_model=list[MonthlyPaceStats])
def get_pace_stats(cache: ActivityCache = Depends(get_activity_cache)):
    """Monthly average pace per category (seconds per meter)."""
    return monthly_pace_stats(cache.read())


@router.get("/weekly-pace-stats", response_model=WeeklyPaceZoneStats)
def get_weekly_pace_stats(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    cache: ActivityCache = Depends(get_activity_cache),
    app_settings: Settings = Depends(get_settings)
):
    """
    Daily pace-zone distances for runs, plus range summary.

    Defaults to the current Monday-Sunday week (UTC). A single bound
    picks the week around it.
    """
    if start_date is None and end_date is None:
        start_date, end_date = current_week()
    elif start_date is None:
        start_date, _ = current_week(end_date)
    elif end_date is None:
        _, end_date = current_week(start_date)

    if start_date > end_date:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")

    span = (end_date - start_date).days + 1
    if span > app_settings.max_range_days:
        raise HTTPException(
            status_code=400,
            detail=f"Date range is {span} days; at most {app_settings.max_range_days} allowed"
        )

    return weekly_pace_zone_stats(cache.read(), start_date, end_date)


@router.get("/training-summary", response_model=TrainingSummary)
def get_training_summary(
    keywords: Optional[str] = Query(None, description="Comma-separated name keywords"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    case_sensitive: bool = Query(False, alias="caseSensitive"),
    cache: ActivityCache = Depends(get_activity_cache)
):
    """Totals for activities matching name keywords within a date range."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")

    return training_summary(
        cache.read(),
        keywords=keywords,
        start=start_date,
        end=end_date,
        case_sensitive=case_sensitive,
    )


@router.get("/tempo-stats", response_model=list[TempoCategoryStats])
def get_tempo_stats(cache: ActivityCache = Depends(get_activity_cache)):
    """Run count, distance, pace and heart rate per tempo marker in run names."""
    return tempo_category_stats(cache.read())
