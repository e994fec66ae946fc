"""
Strava Dashboard API

FastAPI application serving one athlete's Strava activities and
aggregates to the dashboard frontend.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from strava_dashboard import __version__
from strava_dashboard.config import Settings, settings
from strava_dashboard.api.router import api_router
from strava_dashboard.features.activities import ActivityCache, CacheNotFoundError
from strava_dashboard.features.strava import (
    ActivityFetcher,
    StravaAPIError,
    StravaAuthError,
    StravaDecodeError,
    StravaFetchError,
    StravaOAuth,
    TokenManager,
    TokenStore,
    UnauthenticatedError,
)


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Strava Dashboard API...")
    if not app.state.settings.strava_client_id or not app.state.settings.strava_client_secret:
        logger.warning("STRAVA_CLIENT_ID / STRAVA_CLIENT_SECRET not set; login is disabled")

    yield

    logger.info("Shutting down...")


# === Error Translation ===
def _error(status_code: int, error: str, details: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": details, **extra}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""

    @app.exception_handler(StravaAuthError)
    async def auth_error_handler(request: Request, exc: StravaAuthError):
        if isinstance(exc, UnauthenticatedError):
            message = "Not connected to Strava. Log in via /api/auth/strava."
        else:
            message = "Strava authorization expired. Please log in again."
        logger.warning(f"{request.url.path}: {exc}")
        return _error(401, message, str(exc))

    @app.exception_handler(StravaAPIError)
    async def api_error_handler(request: Request, exc: StravaAPIError):
        logger.error(f"{request.url.path}: {exc}")
        return _error(
            502,
            "Strava API returned an error",
            exc.body,
            upstream_status=exc.status_code
        )

    @app.exception_handler(StravaFetchError)
    async def fetch_error_handler(request: Request, exc: StravaFetchError):
        logger.error(f"{request.url.path}: {exc} ({exc.cause!r})")
        return _error(502, "Failed to fetch activities from Strava", str(exc))

    @app.exception_handler(StravaDecodeError)
    async def decode_error_handler(request: Request, exc: StravaDecodeError):
        logger.error(f"{request.url.path}: {exc}")
        return _error(502, "Failed to decode Strava response", str(exc))

    @app.exception_handler(CacheNotFoundError)
    async def cache_error_handler(request: Request, exc: CacheNotFoundError):
        logger.error(f"{request.url.path}: {exc}")
        return _error(
            503,
            "No usable activity cache. Load /api/activities first.",
            str(exc)
        )


# === App Creation ===
def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the application and its single-user components."""
    app = FastAPI(
        title="Strava Dashboard API",
        description="Activity cache and monthly/weekly stats for one Strava athlete",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
    )

    # === Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # === Components ===
    oauth = StravaOAuth(
        client_id=app_settings.strava_client_id,
        client_secret=app_settings.strava_client_secret,
        timeout=app_settings.strava_timeout_seconds,
    )
    cache = ActivityCache(app_settings.activities_file)

    app.state.settings = app_settings
    app.state.token_manager = TokenManager(
        TokenStore(app_settings.token_file),
        oauth,
        margin_seconds=app_settings.token_refresh_margin_seconds,
    )
    app.state.activity_cache = cache
    app.state.activity_fetcher = ActivityFetcher(
        cache,
        per_page=app_settings.strava_page_size,
        timeout=app_settings.strava_timeout_seconds,
    )

    register_exception_handlers(app)

    # === Routes ===
    app.include_router(api_router)

    return app


app = create_app()
