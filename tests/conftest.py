"""
Pytest fixtures and configuration for all tests.
"""

import os

# app.main lee la configuración al importarse
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
from typing import AsyncGenerator
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.models.league import League

# MongoDB test database
TEST_DB_URI = os.getenv("TEST_MONGODB_URI", "mongodb://localhost:27017")
TEST_DB_NAME = "league_rewards_test"


@pytest.fixture(scope="session")
def worker_id(request):
    """
    Return the worker ID when using pytest-xdist, otherwise 'master'.
    This allows each worker to use its own test database.
    """
    if hasattr(request.config, 'workerinput'):
        return request.config.workerinput['workerid']
    return 'master'


@pytest.fixture(scope="function")
async def test_db(worker_id) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Provide a clean MongoDB test database for each test.

    Skips the test when no MongoDB server is reachable.
    """
    client = AsyncIOMotorClient(TEST_DB_URI, serverSelectionTimeoutMS=500, tz_aware=True)
    try:
        await client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip(f"MongoDB not reachable at {TEST_DB_URI}")

    db_name = f"{TEST_DB_NAME}_{worker_id}" if worker_id != "master" else TEST_DB_NAME
    db = client[db_name]

    yield db

    # Cleanup: drop all collections after test
    collection_names = await db.list_collection_names()
    for collection_name in collection_names:
        await db[collection_name].drop()

    client.close()


@pytest.fixture
def window_start():
    return datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def run_at():
    return datetime(2024, 3, 10, 23, 59, tzinfo=timezone.utc)


@pytest.fixture
def sample_leagues():
    return [
        League(_id="league-1", name="Madrid Runners"),
        League(_id="league-2", name="Sevilla Bikers"),
    ]


@pytest.fixture
def sample_league_doc():
    return {"_id": "league-1", "name": "Madrid Runners"}


@pytest.fixture
def sample_activity_doc():
    return {
        "user_id": "user123",
        "league_id": "league-1",
        "date": datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc),
        "distance_km": 10.5,
        "duration_seconds": 3600,
        "points_earned": 105,
        "points_breakdown": ["distance", "streak"],
        "is_bonus": False,
    }
