"""
Strava OAuth Routes

Endpoints for Strava integration:
- /api/auth/strava - Initiate OAuth flow
- /strava-callback - Handle OAuth callback
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from strava_dashboard.api.deps import get_settings, get_token_manager
from strava_dashboard.config import Settings
from strava_dashboard.features.strava import StravaOAuthError, TokenManager

logger = logging.getLogger(__name__)

router = APIRouter()


def _frontend_redirect(app_settings: Settings, auth_status: str) -> RedirectResponse:
    url = f"{app_settings.frontend_url.rstrip('/')}/?auth_status={auth_status}"
    return RedirectResponse(url=url, status_code=307)


@router.get("/api/auth/strava")
async def strava_auth(
    app_settings: Settings = Depends(get_settings),
    tokens: TokenManager = Depends(get_token_manager)
):
    """Redirect the browser to Strava's authorization page."""
    if not app_settings.strava_client_id:
        raise HTTPException(
            status_code=503,
            detail="Strava integration not configured"
        )

    auth_url = tokens.oauth.get_authorization_url(
        redirect_uri=app_settings.strava_redirect_uri,
        scope=app_settings.strava_scope
    )
    logger.info("Strava OAuth initiated")
    return RedirectResponse(url=auth_url, status_code=302)


@router.get("/strava-callback")
async def strava_callback(
    code: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    app_settings: Settings = Depends(get_settings),
    tokens: TokenManager = Depends(get_token_manager)
):
    """
    Handle Strava OAuth callback.

    Exchanges code for tokens, stores them and sends the browser back
    to the frontend.
    """
    if not code:
        if error:
            logger.warning(f"Strava OAuth error: {error}")
            return _frontend_redirect(app_settings, "denied")
        raise HTTPException(status_code=400, detail="Authorization code not found")

    try:
        await tokens.exchange_code(code)
    except StravaOAuthError as e:
        logger.error(f"Token exchange failed: {e}")
        return _frontend_redirect(app_settings, "error")

    return _frontend_redirect(app_settings, "success")
