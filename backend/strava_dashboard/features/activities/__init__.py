"""
Activity cache module.

Usage:
    from strava_dashboard.features.activities import ActivityCache, Activity

Components:
- Activity: Typed view of one Strava activity
- ActivityCache: On-disk JSON snapshot with read-through refresh
"""

from .models import Activity, parse_timestamp
from .cache import (
    ActivityCache,
    ActivityCacheError,
    CacheInfo,
    CacheNotFoundError,
    CorruptCacheError,
    decode_activities,
)

__all__ = [
    # Models
    "Activity",
    "parse_timestamp",
    # Cache
    "ActivityCache",
    "ActivityCacheError",
    "CacheInfo",
    "CacheNotFoundError",
    "CorruptCacheError",
    "decode_activities",
]
