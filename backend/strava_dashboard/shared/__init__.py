"""
Shared utilities (NOT business logic).

Usage:
    from strava_dashboard.shared import classify_activity, write_json_atomic
    from strava_dashboard.shared.formatters import format_pace
"""
from .constants import (
    StravaActivityType,
    ActivityCategory,
    PaceZone,
    STRAVA_TO_CATEGORY,
    PACE_ZONE_ACTIVITY_TYPE,
    TEMPO_MARKERS,
    TEMPO_LABELS,
    classify_activity,
    classify_pace_zone,
)
from .formatters import (
    meters_to_km,
    safe_pace,
    format_pace,
)
from .storage import (
    write_json_atomic,
    read_json,
)

__all__ = [
    # Constants
    "StravaActivityType",
    "ActivityCategory",
    "PaceZone",
    "STRAVA_TO_CATEGORY",
    "PACE_ZONE_ACTIVITY_TYPE",
    "TEMPO_MARKERS",
    "TEMPO_LABELS",
    "classify_activity",
    "classify_pace_zone",
    # Formatters
    "meters_to_km",
    "safe_pace",
    "format_pace",
    # Storage
    "write_json_atomic",
    "read_json",
]
