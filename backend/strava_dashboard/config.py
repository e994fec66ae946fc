"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import Annotated, List, Optional
from pydantic_settings import BaseSettings, NoDecode
from pydantic import AliasChoices, Field, field_validator, ConfigDict

# Project root: strava-dashboard/
PROJECT_ROOT = Path(__file__).parent.parent.parent
# Data directory: strava-dashboard/data/
DATA_DIR = PROJECT_ROOT / "data"

# Strava never returns more than this many activities per page
STRAVA_MAX_PAGE_SIZE = 200


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Frontend ===
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Where the OAuth callback sends the browser back to"
    )
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # === Local storage ===
    activities_file: Path = Field(
        default=DATA_DIR / "strava_activities.json",
        description="Raw activity snapshot"
    )
    token_file: Path = Field(
        default=DATA_DIR / "strava_token.json",
        description="Persisted OAuth token triple"
    )

    # === Strava ===
    strava_client_id: Optional[str] = Field(default=None)
    strava_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("strava_client_secret", "strava_secret")
    )
    strava_redirect_uri: str = Field(
        default="http://localhost:8080/strava-callback",
        description="OAuth redirect URI registered with Strava"
    )
    strava_scope: str = Field(default="read,activity:read_all")
    strava_page_size: int = Field(
        default=STRAVA_MAX_PAGE_SIZE,
        description="Activities requested per page during a full fetch"
    )
    strava_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every upstream request"
    )
    token_refresh_margin_seconds: int = Field(
        default=60,
        description="Refresh the access token this long before it expires"
    )

    # === Stats ===
    max_range_days: int = Field(
        default=366,
        description="Longest day range accepted by the weekly pace endpoint"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('strava_page_size')
    @classmethod
    def check_page_size(cls, v: int) -> int:
        """Strava caps per_page at 200."""
        if not 1 <= v <= STRAVA_MAX_PAGE_SIZE:
            raise ValueError(f"strava_page_size must be between 1 and {STRAVA_MAX_PAGE_SIZE}")
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance
settings = Settings()
