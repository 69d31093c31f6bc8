# app/core/config.py
from functools import lru_cache

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime and cover:
    - Zoom Server-to-Server OAuth credentials
    - Provider HTTP timeouts
    - Engagement analytics defaults (bucket width, window lengths)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Zoom Engagement Dashboard"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")
    LOG_LEVEL: str = Field("INFO", description="Root log level (DEBUG/INFO/WARNING/...).")

    ZOOM_ACCOUNT_ID: str | None = None
    ZOOM_CLIENT_ID: str | None = None
    ZOOM_CLIENT_SECRET: str | None = None
    ZOOM_API_BASE_URL: AnyHttpUrl | None = Field(
        default=None,
        description="Base URL of the Zoom REST API. Defaults to https://api.zoom.us/v2.",
    )
    ZOOM_OAUTH_URL: AnyHttpUrl | None = Field(
        default=None,
        description="Zoom OAuth token endpoint. Defaults to https://zoom.us/oauth/token.",
    )
    ZOOM_HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Timeout applied to regular Zoom API calls.",
    )
    TRANSCRIPT_DOWNLOAD_TIMEOUT_SECONDS: float = Field(
        default=120.0,
        description="Timeout applied to each transcript download attempt.",
    )

    # --- Engagement analytics defaults ---
    DEFAULT_INTERVAL_MINUTES: int = Field(
        default=5,
        gt=0,
        description="Bucket width used when the caller does not supply one.",
    )
    DEFAULT_MEETING_DURATION_MINUTES: int = Field(
        default=60,
        gt=0,
        description=(
            "Analysis window for meetings. The participants report does not carry "
            "the real meeting length, so a fixed window is used."
        ),
    )
    DEFAULT_WEBINAR_DURATION_MINUTES: int = Field(
        default=180,
        gt=0,
        description="Analysis window used when a webinar's duration cannot be fetched.",
    )
    PARTICIPANTS_PAGE_SIZE: int = Field(
        default=300,
        gt=0,
        le=300,
        description="page_size requested from the participant report endpoints.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
