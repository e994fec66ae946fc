"""
Activity cache.

A single on-disk JSON snapshot of the athlete's full activity list,
stored exactly as Strava returned it. There is no TTL: the snapshot is
replaced only when the caller asks for a refresh or the file is missing
or unreadable.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ValidationError

from strava_dashboard.shared.storage import read_json, write_json_atomic
from .models import Activity

if TYPE_CHECKING:
    from strava_dashboard.features.strava.client import ActivityFetcher

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class ActivityCacheError(Exception):
    """Base cache error."""
    pass


class CacheNotFoundError(ActivityCacheError):
    """No snapshot on disk."""
    pass


class CorruptCacheError(CacheNotFoundError):
    """Snapshot exists but is not a JSON array; treated like a miss."""
    pass


# =============================================================================
# Cache
# =============================================================================

class CacheInfo(BaseModel):
    """Cache liveness for the status endpoint."""

    present: bool
    valid: bool = False
    activity_count: int = 0
    updated_at: Optional[datetime] = None


def decode_activities(raw_items: list) -> list[Activity]:
    """
    Decode raw Strava activity dicts.

    Records missing required fields or with invalid values are skipped.
    """
    activities = []
    for item in raw_items:
        try:
            activities.append(Activity.model_validate(item))
        except ValidationError:
            logger.debug(f"Skipping malformed activity record: {str(item)[:120]}")
    return activities


class ActivityCache:
    """
    Read-through cache over the activity snapshot file.

    Usage:
        cache = ActivityCache(settings.activities_file)
        activities = cache.read()
        activities = await cache.read_or_refresh(token, fetcher, force_refresh=True)
    """

    def __init__(self, path: Path):
        self.path = path

    def read_raw(self) -> list[dict]:
        """
        Load the snapshot as stored.

        Raises:
            CacheNotFoundError: If the file is absent
            CorruptCacheError: If the file is not a JSON array
        """
        try:
            data = read_json(self.path)
        except FileNotFoundError as e:
            raise CacheNotFoundError(f"No cached activities at {self.path}") from e
        except (OSError, ValueError) as e:
            raise CorruptCacheError(f"Cached activities unreadable: {e}") from e

        if not isinstance(data, list):
            raise CorruptCacheError("Cached activities are not a JSON array")
        return data

    def read(self) -> list[Activity]:
        """Load and decode the snapshot."""
        return decode_activities(self.read_raw())

    def write(self, raw_items: list[dict]) -> None:
        """Replace the snapshot with a complete collection."""
        write_json_atomic(self.path, raw_items, indent=2)
        logger.info(f"Cached {len(raw_items)} activities to {self.path}")

    async def read_or_refresh(
        self,
        access_token: str,
        fetcher: "ActivityFetcher",
        force_refresh: bool = False
    ) -> list[Activity]:
        """
        Return cached activities, fetching from Strava when needed.

        Fetches when force_refresh is set or the cache is missing/corrupt.
        Fetch errors propagate and leave the existing file untouched.
        """
        if not force_refresh:
            try:
                activities = self.read()
                logger.info(f"Serving {len(activities)} activities from {self.path}")
                return activities
            except CorruptCacheError as e:
                logger.warning(f"{e}; refetching from Strava")
            except CacheNotFoundError:
                logger.info("No local activity cache; fetching from Strava")
        else:
            logger.info("Forced refresh; fetching all activities from Strava")

        return await fetcher.fetch_all(access_token)

    def info(self) -> CacheInfo:
        """Describe the snapshot without raising."""
        if not self.path.exists():
            return CacheInfo(present=False)

        updated_at = datetime.fromtimestamp(self.path.stat().st_mtime, tz=timezone.utc)
        try:
            count = len(self.read_raw())
        except ActivityCacheError:
            return CacheInfo(present=True, valid=False, updated_at=updated_at)

        return CacheInfo(
            present=True,
            valid=True,
            activity_count=count,
            updated_at=updated_at,
        )
