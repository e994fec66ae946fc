"""
Pytest configuration and fixtures.

Upstream Strava calls are served by httpx.MockTransport through
StravaStub, so no test touches the network.
"""

import json
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

from strava_dashboard.config import Settings
from strava_dashboard.features.activities import ActivityCache
from strava_dashboard.features.strava import (
    ActivityFetcher,
    StravaOAuth,
    TokenManager,
    TokenStore,
)


NOW = 1_700_000_000  # fixed "current" epoch seconds for token tests


# =============================================================================
# Strava stub
# =============================================================================

class StravaStub:
    """
    Fake Strava backend for httpx.MockTransport.

    - POST /oauth/token answers with token_status / token_response
    - GET /api/v3/athlete/activities pages through `activities`
    - page_responses / page_errors override individual pages
    """

    def __init__(self, activities: list[dict] | None = None):
        self.activities = activities or []
        self.token_status = 200
        self.token_response = {
            "access_token": "new-access",
            "refresh_token": "new-refresh",
            "expires_at": NOW + 6 * 3600,
            "athlete": {"id": 42},
        }
        self.page_responses: dict[int, httpx.Response] = {}
        self.page_errors: dict[int, Exception] = {}
        self.token_error: Exception | None = None
        self.requests: list[httpx.Request] = []

    @property
    def token_requests(self) -> list[dict]:
        return [
            {k: v[0] for k, v in parse_qs(r.content.decode()).items()}
            for r in self.requests if r.url.path == "/oauth/token"
        ]

    @property
    def page_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/athlete/activities")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/oauth/token":
            if self.token_error is not None:
                raise self.token_error
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status,
                    json={"message": "Bad Request", "errors": [{"code": "invalid"}]}
                )
            return httpx.Response(200, json=self.token_response)

        if request.url.path == "/api/v3/athlete/activities":
            page = int(request.url.params["page"])
            per_page = int(request.url.params["per_page"])
            if page in self.page_errors:
                raise self.page_errors[page]
            if page in self.page_responses:
                return self.page_responses[page]
            chunk = self.activities[(page - 1) * per_page: page * per_page]
            return httpx.Response(200, json=chunk)

        return httpx.Response(404, json={"message": "Record Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def activity_factory():
    """Build raw Strava activity dicts with sensible defaults."""
    counter = {"id": 1000}

    def _make(**overrides) -> dict:
        counter["id"] += 1
        activity = {
            "id": counter["id"],
            "name": "Morning Run",
            "distance": 10000.0,
            "moving_time": 3000,
            "elapsed_time": 3100,
            "type": "Run",
            "start_date": "2024-03-15T10:00:00Z",
            "start_date_local": "2024-03-15T17:00:00Z",
            "average_heartrate": 150.0,
            "total_elevation_gain": 42.0,
            "map": {"summary_polyline": "abc"},
        }
        activity.update(overrides)
        return activity

    return _make


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing all storage into a temp directory."""
    return Settings(
        strava_client_id="12345",
        strava_client_secret="shh",
        frontend_url="http://localhost:5173",
        activities_file=tmp_path / "data" / "strava_activities.json",
        token_file=tmp_path / "data" / "strava_token.json",
        strava_page_size=200,
        token_refresh_margin_seconds=60,
    )


@pytest.fixture
def strava() -> StravaStub:
    return StravaStub()


@pytest.fixture
def oauth(strava: StravaStub) -> StravaOAuth:
    return StravaOAuth(
        client_id="12345",
        client_secret="shh",
        timeout=5,
        transport=strava.transport
    )


@pytest.fixture
def cache(test_settings: Settings) -> ActivityCache:
    return ActivityCache(test_settings.activities_file)


@pytest.fixture
def fetcher(cache: ActivityCache, strava: StravaStub) -> ActivityFetcher:
    return ActivityFetcher(cache, per_page=200, timeout=5, transport=strava.transport)


@pytest.fixture
def write_token(test_settings: Settings):
    """Persist a token triple as if from a previous run."""
    def _write(access_token="stored-access", refresh_token="stored-refresh", expires_at=NOW + 3600):
        test_settings.token_file.parent.mkdir(parents=True, exist_ok=True)
        test_settings.token_file.write_text(json.dumps({
            "access_token": access_token,
            "refresh_token": refresh_token,
            "expires_at": expires_at,
        }))
    return _write


@pytest.fixture
def make_token_manager(test_settings: Settings, oauth: StravaOAuth):
    """TokenManager over the temp token file with a frozen clock."""
    def _make(now: float = NOW) -> TokenManager:
        return TokenManager(
            TokenStore(test_settings.token_file),
            oauth,
            margin_seconds=60,
            clock=lambda: now
        )
    return _make
