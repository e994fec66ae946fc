"""
Token storage and lifecycle.

The token triple is the only shared mutable state in the process.
TokenStore persists it as a flat JSON file; TokenManager keeps an
in-memory mirror behind one asyncio.Lock and refreshes it on demand.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from strava_dashboard.shared.storage import read_json, write_json_atomic
from .errors import (
    StravaOAuthError,
    TokenRefreshError,
    UnauthenticatedError,
)
from .models import TokenRecord
from .oauth import StravaOAuth

logger = logging.getLogger(__name__)


class TokenStore:
    """Persists the OAuth token triple to a JSON file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> TokenRecord:
        """
        Load the stored token.

        Returns an empty record if the file is missing or unreadable;
        a damaged file is treated as "never authenticated".
        """
        try:
            data = read_json(self.path)
        except FileNotFoundError:
            return TokenRecord()
        except (OSError, ValueError) as e:
            logger.warning(f"Token file {self.path} is unreadable, ignoring it: {e}")
            return TokenRecord()

        try:
            return TokenRecord.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Token file {self.path} has an unexpected shape: {e}")
            return TokenRecord()

    def save(self, record: TokenRecord) -> None:
        write_json_atomic(self.path, record.model_dump())


class TokenManager:
    """
    Hands out valid access tokens, refreshing them when needed.

    Features:
    - Expiry check with a safety margin
    - Automatic refresh via StravaOAuth
    - Lock held only around reads/writes of the mirror, never across
      network calls. Concurrent refreshes are not collapsed; the last
      one to commit wins.

    Usage:
        manager = TokenManager(TokenStore(path), StravaOAuth())
        await manager.exchange_code(code)
        token = await manager.ensure_valid_token()
    """

    def __init__(
        self,
        store: TokenStore,
        oauth: StravaOAuth,
        margin_seconds: float = 60,
        clock: Callable[[], float] = time.time
    ):
        self.store = store
        self.oauth = oauth
        self.margin_seconds = margin_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._record = store.load()

        if self._record.is_authenticated:
            logger.info(f"Loaded Strava token (expires_at={self._record.expires_at})")

    async def current(self) -> TokenRecord:
        """Snapshot of the in-memory token."""
        async with self._lock:
            return self._record.model_copy()

    async def ensure_valid_token(self) -> str:
        """
        Get a valid access token, refreshing if needed.

        Raises:
            UnauthenticatedError: If no token was ever obtained
            TokenRefreshError: If the refresh fails
        """
        async with self._lock:
            record = self._record

        if not record.is_authenticated:
            raise UnauthenticatedError("Not connected to Strava")

        if not record.expires_within(self.margin_seconds, self._clock()):
            return record.access_token

        if not record.refresh_token:
            raise TokenRefreshError("No refresh token stored")

        logger.info("Refreshing Strava access token")
        try:
            token_data = await self.oauth.refresh_token(record.refresh_token)
        except StravaOAuthError as e:
            raise TokenRefreshError(str(e)) from e

        refreshed = await self._commit(token_data)
        return refreshed.access_token

    async def exchange_code(self, code: str) -> TokenRecord:
        """
        Exchange an authorization code and store the resulting tokens.

        Raises:
            StravaOAuthError: If the exchange fails
        """
        token_data = await self.oauth.exchange_code(code)
        record = await self._commit(token_data)

        athlete_id = (token_data.get("athlete") or {}).get("id")
        logger.info(f"Strava connected: athlete_id={athlete_id}")
        return record

    async def _commit(self, token_data: dict) -> TokenRecord:
        """Replace the stored token; keep the old refresh token if none was issued."""
        async with self._lock:
            record = TokenRecord(
                access_token=token_data["access_token"],
                refresh_token=token_data.get("refresh_token") or self._record.refresh_token,
                expires_at=int(token_data["expires_at"]),
            )
            self.store.save(record)
            self._record = record
            return record.model_copy()
