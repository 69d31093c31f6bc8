# tests/test_health.py
from http import HTTPStatus

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies.zoom import get_optional_zoom_client
from app.core.config import get_settings
from app.main import create_app


class _StubZoomClient:
    """Stands in for a configured ZoomClient; health never calls it."""


@pytest.mark.parametrize("zoom_client,expected", [(None, False), (_StubZoomClient(), True)])
def test_health_reports_zoom_configuration(zoom_client, expected):
    """
    /health tells the dashboard whether real Zoom data can be expected,
    without calling Zoom.
    """
    app = create_app()
    app.dependency_overrides[get_optional_zoom_client] = lambda: zoom_client

    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["status"] == "ok"
    assert data["zoom_configured"] is expected


def test_health_exposes_app_settings(client):
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["app_name"] == get_settings().APP_NAME
    assert data["default_interval_minutes"] == get_settings().DEFAULT_INTERVAL_MINUTES
    assert isinstance(data["environment"], str)
    assert "timestamp_utc" in data
