"""
Strava OAuth models.

The token triple as persisted between restarts.
"""

from pydantic import BaseModel


class TokenRecord(BaseModel):
    """
    OAuth credential triple.

    An empty access_token means the user never authenticated.
    """

    access_token: str = ""
    refresh_token: str = ""
    expires_at: int = 0  # epoch seconds, as issued by Strava

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def expires_within(self, seconds: float, now: float) -> bool:
        """True if the token is expired or expires within `seconds` of `now`."""
        return now >= self.expires_at - seconds
