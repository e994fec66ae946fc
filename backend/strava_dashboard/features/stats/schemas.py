"""
Stats schemas.

Pydantic response models for the aggregation endpoints.
Distances are meters and paces seconds per meter unless the field
name says otherwise (*_km).
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class MonthlyDistanceStats(BaseModel):
    """Distance per category for one month."""

    month_year: str = Field(description="YYYY-MM")
    run_walk_hike: float = 0.0
    bike: float = 0.0
    other: float = 0.0


class MonthlyPaceStats(BaseModel):
    """Accumulated time/distance and average pace per category for one month."""

    month_year: str = Field(description="YYYY-MM")

    run_walk_hike_time: float = 0.0
    run_walk_hike_distance: float = 0.0
    bike_time: float = 0.0
    bike_distance: float = 0.0
    other_time: float = 0.0
    other_distance: float = 0.0

    # 0 means no distance in that category, not an actual pace
    run_walk_hike_pace: float = 0.0
    bike_pace: float = 0.0
    other_pace: float = 0.0


class ZoneDistances(BaseModel):
    """Kilometers run in each pace zone."""

    Red: float = 0.0
    Orange: float = 0.0
    Yellow: float = 0.0
    Green: float = 0.0


class WeeklySummary(BaseModel):
    """Totals over the whole date range."""

    total_distance_km: float = 0.0
    total_moving_time_seconds: float = 0.0
    average_pace_sec_per_m: float = 0.0


class WeeklyPaceZoneStats(BaseModel):
    """Pace-zone breakdown per day (keyed YYYY-MM-DD) plus summary."""

    start_date: date
    end_date: date
    pace_data: dict[str, ZoneDistances]
    summary: WeeklySummary


class TrainingSummary(BaseModel):
    """Totals for activities matching name keywords and a date range."""

    keywords: list[str] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_activities: int = 0
    total_distance_km: float = 0.0
    total_moving_time_seconds: float = 0.0
    average_distance_km: float = 0.0
    average_pace_sec_per_m: float = 0.0
    average_pace: str = "N/A"


class TempoCategoryStats(BaseModel):
    """Run totals for one tempo marker found in activity names."""

    zone: str = Field(description="Red, Orange, Yellow or Green")
    marker: str
    label: str
    activity_count: int = 0
    total_distance_km: float = 0.0
    total_moving_time_seconds: float = 0.0
    average_pace_sec_per_m: float = 0.0
    average_pace: str = "N/A"
    # 0 when none of the runs recorded heart rate
    average_heartrate: float = 0.0
