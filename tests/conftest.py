# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all tests.

    Uses the application factory so dependency overrides set by individual
    tests stay local to their own app instance.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_record():
    """
    Factory for participant report entries in the raw Zoom JSON shape.
    """
    from app.schemas.attendance import AttendanceRecord

    def _make(
        name: str,
        join_time,
        leave_time,
        duration: int = 0,
        user_id: str | None = None,
        email: str | None = None,
    ) -> AttendanceRecord:
        return AttendanceRecord.model_validate(
            {
                "id": f"id-{name}",
                "user_id": user_id if user_id is not None else f"user-{name}",
                "name": name,
                "user_email": email if email is not None else f"{name.lower()}@example.com",
                "join_time": join_time,
                "leave_time": leave_time,
                "duration": duration,
            }
        )

    return _make
