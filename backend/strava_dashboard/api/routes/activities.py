"""
Activity Routes

- /api/status - Token and cache liveness
- /api/activities - Cached (or freshly fetched) activity list
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from strava_dashboard.api.deps import (
    get_activity_cache,
    get_activity_fetcher,
    get_token_manager,
)
from strava_dashboard.features.activities import Activity, ActivityCache, CacheInfo
from strava_dashboard.features.strava import ActivityFetcher, TokenManager

logger = logging.getLogger(__name__)

router = APIRouter()


class StatusResponse(BaseModel):
    status: str
    authenticated: bool
    token_expires_at: Optional[int] = None
    token_expired: Optional[bool] = None
    cache: CacheInfo


@router.get("/status", response_model=StatusResponse)
async def get_status(
    tokens: TokenManager = Depends(get_token_manager),
    cache: ActivityCache = Depends(get_activity_cache)
):
    """Backend liveness with token and cache state."""
    token = await tokens.current()

    if not token.is_authenticated:
        return StatusResponse(status="ok", authenticated=False, cache=cache.info())

    return StatusResponse(
        status="ok",
        authenticated=True,
        token_expires_at=token.expires_at,
        token_expired=token.expires_within(0, time.time()),
        cache=cache.info(),
    )


@router.get("/activities", response_model=list[Activity])
async def get_activities(
    refresh: bool = Query(False, description="Refetch everything from Strava"),
    tokens: TokenManager = Depends(get_token_manager),
    cache: ActivityCache = Depends(get_activity_cache),
    fetcher: ActivityFetcher = Depends(get_activity_fetcher)
):
    """
    All activities, from the local cache when possible.

    Requires a connected Strava account even when serving the cache.
    """
    access_token = await tokens.ensure_valid_token()
    return await cache.read_or_refresh(access_token, fetcher, force_refresh=refresh)
