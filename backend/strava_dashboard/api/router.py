"""
API Router

Combines all route modules.
"""

from fastapi import APIRouter

from strava_dashboard.api.routes import activities, auth, stats

api_router = APIRouter()

api_router.include_router(auth.router, tags=["Strava"])
api_router.include_router(activities.router, prefix="/api", tags=["Activities"])
api_router.include_router(stats.router, prefix="/api", tags=["Stats"])
