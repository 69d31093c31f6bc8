# app/main.py
from fastapi import FastAPI

from app.api.routes import analytics, health, meetings, transcripts, webinars
from app.core.config import get_settings
from app.core.logging_config import setup_logging


def create_app() -> FastAPI:
    """
    Application factory for the Zoom engagement dashboard service.
    """
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Backend service that pulls participant reports from Zoom, derives\n"
            "time-bucketed engagement analytics per meeting or webinar, and exposes\n"
            "meeting listings and cloud recording transcripts for the dashboard."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(meetings.router)
    app.include_router(webinars.router)
    app.include_router(transcripts.router)
    app.include_router(analytics.router)

    return app


app = create_app()
