"""
Route dependencies.

Components live on app.state (built once in create_app) and are handed
to routes through Depends, so tests can swap them per app instance.
"""

from fastapi import Request

from strava_dashboard.config import Settings
from strava_dashboard.features.activities import ActivityCache
from strava_dashboard.features.strava import ActivityFetcher, TokenManager


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_manager(request: Request) -> TokenManager:
    return request.app.state.token_manager


def get_activity_cache(request: Request) -> ActivityCache:
    return request.app.state.activity_cache


def get_activity_fetcher(request: Request) -> ActivityFetcher:
    return request.app.state.activity_fetcher
