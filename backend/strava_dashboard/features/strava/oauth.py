"""
Strava OAuth flow.

Handles:
- Authorization URL generation
- Code exchange for tokens
- Token refresh
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from strava_dashboard.config import settings
from .errors import StravaOAuthError

logger = logging.getLogger(__name__)


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth()
        auth_url = oauth.get_authorization_url()
        tokens = await oauth.exchange_code(code)
        tokens = await oauth.refresh_token(refresh_token)
    """

    AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
    TOKEN_URL = "https://www.strava.com/oauth/token"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.client_id = client_id or settings.strava_client_id
        self.client_secret = client_secret or settings.strava_client_secret
        self.timeout = timeout or settings.strava_timeout_seconds
        self._transport = transport

    def get_authorization_url(
        self,
        redirect_uri: Optional[str] = None,
        scope: Optional[str] = None
    ) -> str:
        """
        Generate Strava OAuth authorization URL.

        Args:
            redirect_uri: URL to redirect after authorization
            scope: OAuth scope (default: read,activity:read_all)

        Scopes:
        - read - Public profile
        - activity:read_all - View all activities (including private)

        Returns:
            Authorization URL string
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or settings.strava_redirect_uri,
            "response_type": "code",
            "scope": scope or settings.strava_scope,
            "approval_prompt": "auto"  # "force" to always show consent
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> dict:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from Strava callback

        Returns:
            {
                "access_token": "...",
                "refresh_token": "...",
                "expires_at": 1234567890,
                "athlete": {"id": 123, "firstname": "...", ...}
            }

        Raises:
            StravaOAuthError: If token exchange fails
        """
        return await self._token_request({
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code"
        })

    async def refresh_token(self, refresh_token: str) -> dict:
        """
        Refresh an expired access token.

        Args:
            refresh_token: Current refresh token

        Returns:
            {
                "access_token": "...",
                "refresh_token": "...",
                "expires_at": 1234567890
            }

        Raises:
            StravaOAuthError: If token refresh fails
        """
        return await self._token_request({
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token"
        })

    async def _token_request(self, data: dict) -> dict:
        grant_type = data["grant_type"]
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.post(self.TOKEN_URL, data=data)
        except httpx.HTTPError as e:
            logger.error(f"Strava token request ({grant_type}) failed: {e}")
            raise StravaOAuthError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Strava token request ({grant_type}) rejected: {response.text}")
            raise StravaOAuthError(
                f"Token request failed: {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise StravaOAuthError("Token response is not valid JSON") from e

        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise StravaOAuthError("Token response has no access_token")

        expires_at = payload.get("expires_at")
        if isinstance(expires_at, bool) or not isinstance(expires_at, int):
            raise StravaOAuthError(f"Token response has no usable expires_at: {expires_at!r}")

        return payload
