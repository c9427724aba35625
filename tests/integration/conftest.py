"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.database import Database


@pytest.fixture
async def client():
    """
    HTTP client for the service endpoints.

    Runs without lifespan, so no database connection or scheduler is started.
    """
    original_db = Database.db
    original_scheduler = getattr(app.state, "scheduler", None)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    Database.db = original_db
    app.state.scheduler = original_scheduler
