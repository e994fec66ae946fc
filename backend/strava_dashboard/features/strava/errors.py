"""
Strava integration errors.

Auth errors mean the user has to go through OAuth again.
Fetch errors mean the bulk download did not complete and the
cache on disk was left untouched.
"""


class StravaError(Exception):
    """Base Strava error."""
    pass


# =============================================================================
# Authentication
# =============================================================================

class StravaAuthError(StravaError):
    """Authentication/authorization error."""
    pass


class UnauthenticatedError(StravaAuthError):
    """No token has ever been obtained."""
    pass


class TokenRefreshError(StravaAuthError):
    """Refresh token rejected or refresh request failed."""
    pass


class StravaOAuthError(StravaAuthError):
    """Authorization code exchange failed."""
    pass


# =============================================================================
# Activity fetch
# =============================================================================

class StravaFetchError(StravaError):
    """Network error or timeout while talking to Strava."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class StravaAPIError(StravaError):
    """Strava answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"API error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


class StravaDecodeError(StravaError):
    """Strava response body was not the expected JSON."""
    pass
