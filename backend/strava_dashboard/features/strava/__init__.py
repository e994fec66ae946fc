"""
Strava integration module.

Usage:
    from strava_dashboard.features.strava import StravaOAuth, TokenManager, ActivityFetcher

Components:
- StravaOAuth: OAuth flow (auth URL, token exchange, refresh)
- TokenStore / TokenManager: Persisted token with automatic refresh
- ActivityFetcher: Paginated download of all activities

Models:
- TokenRecord: OAuth token triple
"""

from .errors import (
    StravaError,
    StravaAuthError,
    UnauthenticatedError,
    TokenRefreshError,
    StravaOAuthError,
    StravaFetchError,
    StravaAPIError,
    StravaDecodeError,
)
from .models import TokenRecord
from .oauth import StravaOAuth
from .tokens import TokenStore, TokenManager
from .client import ActivityFetcher

__all__ = [
    # Errors
    "StravaError",
    "StravaAuthError",
    "UnauthenticatedError",
    "TokenRefreshError",
    "StravaOAuthError",
    "StravaFetchError",
    "StravaAPIError",
    "StravaDecodeError",
    # Models
    "TokenRecord",
    # OAuth
    "StravaOAuth",
    # Tokens
    "TokenStore",
    "TokenManager",
    # Client
    "ActivityFetcher",
]
