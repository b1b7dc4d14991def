"""
pytest configuration and shared fixtures for the TrashVision API tests.

Key concern: tests must not require a live MySQL server or a running
poller. We achieve this by:
  1. Disabling the dashboard poller via env before the app is imported.
     (httpx's ASGITransport does not run the lifespan anyway.)
  2. Injecting fake query services / dashboard state through
     app.dependency_overrides, and fake connection factories through
     LogQueryService's `connect` parameter.
  3. Building Settings explicitly in each test that cares about DB_*
     values instead of relying on the developer's environment.
"""

import os
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["DASHBOARD_POLL_ENABLED"] = "false"

from trashvision.core.config import Settings  # noqa: E402
from trashvision.models.trash_log import TrashEvent  # noqa: E402


def make_settings(**overrides) -> Settings:
    """A fully configured Settings that ignores .env and the real environment."""
    values = {
        "db_host": "db.example.test",
        "db_port": "3306",
        "db_user": "trash",
        "db_password": "secret",
        "db_name": "trashvision",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_event(
    trash_name: str = "PET",
    time_stamp: datetime | None = None,
    *,
    trash_id: int = 1,
    bin_id: int = 1,
    bin_name: str = "PET bin",
    correct: bool = True,
) -> TrashEvent:
    return TrashEvent(
        trash_id=trash_id,
        trash_name=trash_name,
        bin_id=bin_id,
        bin_name=bin_name,
        time_stamp=time_stamp or datetime(2026, 10, 19, 12, 0, 0),
        correct=correct,
    )


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Each test starts with an empty slowapi counter."""
    from trashvision.core.rate_limit import limiter

    limiter.reset()
    yield


@pytest.fixture()
async def client():
    """
    HTTPX async test client wired to the FastAPI app.

    Usage:
        async def test_something(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from trashvision.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
