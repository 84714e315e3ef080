import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from leaderboard.database import RankedStore
from leaderboard.main import create_app
from leaderboard.service import LeaderboardService


@pytest.fixture()
def store() -> RankedStore:
    return RankedStore()


@pytest_asyncio.fixture()
async def ready_store(store: RankedStore) -> RankedStore:
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture()
def service() -> LeaderboardService:
    return LeaderboardService(RankedStore(), max_count=100)


@pytest.fixture()
def client(service: LeaderboardService):
    """TestClient running the app lifespan against an in-memory store."""
    app = create_app(service)
    with TestClient(app) as test_client:
        yield test_client
