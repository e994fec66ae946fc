"""
Activity model.

The subset of Strava activity fields the dashboard depends on.
Field names follow the Strava API so the raw cache and the frontend
share one vocabulary.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Full RFC 3339 date-time: date, 'T', time, then 'Z' or a numeric offset
RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp, None if invalid.

    Date-only strings, week dates and timestamps without an offset are
    rejected even though datetime.fromisoformat would accept them.
    """
    if not value or not RFC3339_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class Activity(BaseModel):
    """
    Activity as listed by GET /athlete/activities.

    Unknown upstream fields are dropped. Dates stay strings so an
    activity with an unparseable date still shows up in the raw list.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    distance: float = Field(ge=0, description="Meters")
    moving_time: float = Field(ge=0, description="Seconds")
    elapsed_time: float = Field(default=0, ge=0, description="Seconds")
    type: str
    start_date: str = Field(description="UTC timestamp, e.g. 2024-03-15T10:00:00Z")
    start_date_local: str = Field(default="", description="Athlete-local timestamp")
    average_heartrate: Optional[float] = Field(default=None, ge=0)

    @property
    def start_utc(self) -> Optional[datetime]:
        """Start time in UTC, None if start_date does not parse."""
        parsed = parse_timestamp(self.start_date)
        if parsed is None:
            return None
        return parsed.astimezone(timezone.utc)

    @property
    def start_local(self) -> Optional[datetime]:
        """
        Start time on the athlete's wall clock.

        Strava suffixes start_date_local with 'Z' even though it is local
        time, so the offset is dropped rather than converted.
        """
        parsed = parse_timestamp(self.start_date_local)
        if parsed is None:
            return None
        return parsed.replace(tzinfo=None)
