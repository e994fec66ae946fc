"""
Strava API client.

Bulk download of the athlete's complete activity list.

Strava API Limits:
- 200 requests per 15 minutes
- 2,000 requests per day
- per_page is capped at 200
"""

import logging
from typing import Optional

import httpx

from strava_dashboard.config import STRAVA_MAX_PAGE_SIZE, settings
from strava_dashboard.features.activities.cache import ActivityCache, decode_activities
from strava_dashboard.features.activities.models import Activity
from .errors import StravaAPIError, StravaDecodeError, StravaFetchError

logger = logging.getLogger(__name__)


class ActivityFetcher:
    """
    Paginated fetch of all activities into the local cache.

    Pages are requested one after another; the first page shorter than
    per_page is the last one. Any failing page aborts the whole fetch
    and nothing is written.

    Usage:
        fetcher = ActivityFetcher(cache)
        activities = await fetcher.fetch_all(access_token)
    """

    API_URL = "https://www.strava.com/api/v3"

    def __init__(
        self,
        cache: ActivityCache,
        per_page: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if per_page is None:
            per_page = settings.strava_page_size
        if per_page < 1:
            raise ValueError(f"per_page must be positive, got {per_page}")

        self.cache = cache
        self.per_page = min(per_page, STRAVA_MAX_PAGE_SIZE)
        self.timeout = timeout or settings.strava_timeout_seconds
        self._transport = transport

    async def fetch_all(self, access_token: str) -> list[Activity]:
        """
        Fetch every activity and replace the cache.

        Raises:
            StravaFetchError: Network error or timeout
            StravaAPIError: Non-2xx response
            StravaDecodeError: Body is not a JSON array
        """
        raw_items: list[dict] = []
        page = 1

        async with httpx.AsyncClient(
            base_url=self.API_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.timeout,
            transport=self._transport
        ) as client:
            while True:
                items = await self._get_page(client, page)
                raw_items.extend(items)
                logger.debug(f"Fetched page {page}: {len(items)} activities")

                if len(items) < self.per_page:
                    break
                page += 1

        logger.info(f"Fetched {len(raw_items)} activities in {page} page(s)")
        self.cache.write(raw_items)
        return decode_activities(raw_items)

    async def _get_page(self, client: httpx.AsyncClient, page: int) -> list[dict]:
        try:
            response = await client.get(
                "/athlete/activities",
                params={"per_page": self.per_page, "page": page}
            )
        except httpx.HTTPError as e:
            logger.error(f"Strava activities page {page} failed: {e!r}")
            raise StravaFetchError(f"Failed to fetch activities page {page}", cause=e) from e

        # Log rate limit headers from Strava
        if "X-RateLimit-Usage" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if not response.is_success:
            logger.error(f"Strava activities page {page} returned {response.status_code}")
            raise StravaAPIError(response.status_code, response.text)

        try:
            items = response.json()
        except ValueError as e:
            raise StravaDecodeError(f"Activities page {page} is not valid JSON") from e

        if not isinstance(items, list):
            raise StravaDecodeError(f"Activities page {page} is not a JSON array")
        return items
