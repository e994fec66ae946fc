"""
Activity statistics module.

Usage:
    from strava_dashboard.features.stats import monthly_distance_stats, weekly_pace_zone_stats
"""
from .schemas import (
    MonthlyDistanceStats,
    MonthlyPaceStats,
    ZoneDistances,
    WeeklySummary,
    WeeklyPaceZoneStats,
    TrainingSummary,
    TempoCategoryStats,
)
from .service import (
    monthly_distance_stats,
    monthly_pace_stats,
    weekly_pace_zone_stats,
    training_summary,
    tempo_category_stats,
    current_week,
    month_key,
    parse_keywords,
)

__all__ = [
    # Schemas
    "MonthlyDistanceStats",
    "MonthlyPaceStats",
    "ZoneDistances",
    "WeeklySummary",
    "WeeklyPaceZoneStats",
    "TrainingSummary",
    "TempoCategoryStats",
    # Service
    "monthly_distance_stats",
    "monthly_pace_stats",
    "weekly_pace_zone_stats",
    "training_summary",
    "tempo_category_stats",
    "current_week",
    "month_key",
    "parse_keywords",
]
