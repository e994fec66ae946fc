"""
Unified constants for activity categories and pace zones.

This module provides a single source of truth for how Strava activity
types are grouped across the dashboard.
"""

from enum import Enum


class StravaActivityType(str, Enum):
    """
    Activity types from Strava API that the dashboard groups explicitly.

    These are Strava's naming conventions, not ours.
    Use STRAVA_TO_CATEGORY to map to our categories.
    """
    RUN = "Run"
    WALK = "Walk"
    HIKE = "Hike"
    RIDE = "Ride"
    VIRTUAL_RIDE = "VirtualRide"


class ActivityCategory(str, Enum):
    """
    Our internal grouping for monthly aggregates.

    Every Strava type maps to exactly one category.
    """
    RUN_WALK_HIKE = "RunWalkHike"
    BIKE = "Bike"
    OTHER = "Other"


# Mapping: Strava type -> our ActivityCategory
STRAVA_TO_CATEGORY: dict[str, ActivityCategory] = {
    StravaActivityType.RUN.value: ActivityCategory.RUN_WALK_HIKE,
    StravaActivityType.WALK.value: ActivityCategory.RUN_WALK_HIKE,
    StravaActivityType.HIKE.value: ActivityCategory.RUN_WALK_HIKE,
    StravaActivityType.RIDE.value: ActivityCategory.BIKE,
    StravaActivityType.VIRTUAL_RIDE.value: ActivityCategory.BIKE,
}


def classify_activity(activity_type: str) -> ActivityCategory:
    """
    Map a Strava activity type to its category.

    Unknown types (Soccer, Yoga, Swim...) fall into OTHER.
    """
    return STRAVA_TO_CATEGORY.get(activity_type, ActivityCategory.OTHER)


class PaceZone(str, Enum):
    """
    Effort bands for running, ordered fastest to slowest.

    Derived from average speed (distance / moving time).
    """
    RED = "Red"        # Max / interval
    ORANGE = "Orange"  # Tempo / threshold
    YELLOW = "Yellow"  # Steady / aerobic
    GREEN = "Green"    # Easy / recovery


# Lower speed bound (m/s) of each zone, fastest first
PACE_ZONE_MIN_SPEED_MPS: list[tuple[PaceZone, float]] = [
    (PaceZone.RED, 4.8),
    (PaceZone.ORANGE, 3.8),
    (PaceZone.YELLOW, 3.0),
]

# Only this type contributes to pace zones
PACE_ZONE_ACTIVITY_TYPE = StravaActivityType.RUN.value


def classify_pace_zone(speed_mps: float) -> PaceZone:
    """
    Classify average speed into a pace zone.

    Args:
        speed_mps: Average speed in meters per second

    Returns:
        PaceZone (GREEN for anything below 3.0 m/s)
    """
    for zone, min_speed in PACE_ZONE_MIN_SPEED_MPS:
        if speed_mps >= min_speed:
            return zone
    return PaceZone.GREEN


# Name markers athletes put in run titles to tag the intended tempo.
# A run whose name carries several markers counts in each of them.
TEMPO_MARKERS: dict[PaceZone, str] = {
    PaceZone.RED: "\U0001F534",     # red circle
    PaceZone.ORANGE: "\U0001F7E0",  # orange circle
    PaceZone.YELLOW: "\U0001F7E1",  # yellow circle
    PaceZone.GREEN: "\U0001F7E2",   # green circle
}

TEMPO_LABELS: dict[PaceZone, str] = {
    PaceZone.RED: "Very Fast Tempo",
    PaceZone.ORANGE: "Fast Tempo",
    PaceZone.YELLOW: "Moderate Tempo",
    PaceZone.GREEN: "Slow Tempo",
}
