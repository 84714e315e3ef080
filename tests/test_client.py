"""Tests for the async client adapter and its text formatting."""

import httpx
import pytest

from leaderboard.client import LeaderboardClient, format_score, format_scores
from leaderboard.database import RankedStore
from leaderboard.errors import StorageUnavailable, ValidationError
from leaderboard.main import create_app
from leaderboard.models.data import Leader
from leaderboard.service import LeaderboardService


def _mock_client(handler) -> LeaderboardClient:
    return LeaderboardClient(base_url="http://leaderboard.test", transport=httpx.MockTransport(handler))


def test_formatting_matches_game_ui():
    leaders = [Leader("Bob", 75), Leader("Carl", 60)]
    assert format_score(leaders[0]) == "Player: Bob, Score: 75"
    assert format_scores(leaders) == "Player: Bob, Score: 75\nPlayer: Carl, Score: 60"
    assert format_scores([]) == ""


@pytest.mark.asyncio
async def test_round_trip_against_app():
    service = LeaderboardService(RankedStore())
    await service.initialize()
    transport = httpx.ASGITransport(app=create_app(service))

    async with LeaderboardClient(base_url="http://leaderboard.test", transport=transport) as client:
        assert await client.check_ready() is True
        assert await client.load_single_entry() is None
        assert await client.load_top_entries() == []

        await client.save_score("Alice", 50)
        await client.save_score("Bob", 75)
        await client.save_score("Carl", 60)

        assert await client.load_single_entry() == Leader("Bob", 75)
        assert await client.load_top_entries(2) == [Leader("Bob", 75), Leader("Carl", 60)]

        with pytest.raises(ValidationError):
            await client.save_score("", 1)

    await service.close()


@pytest.mark.asyncio
async def test_not_ready_service():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "healthy", "uptime": 1.0, "ready": False, "records": 0})

    async with _mock_client(handler) as client:
        assert await client.check_ready() is False


@pytest.mark.asyncio
async def test_unreachable_service():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _mock_client(handler) as client:
        assert await client.check_ready() is False
        with pytest.raises(StorageUnavailable):
            await client.save_score("Alice", 1)


@pytest.mark.asyncio
async def test_server_error_is_storage_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"detail": "Service temporarily unavailable"})

    async with _mock_client(handler) as client:
        with pytest.raises(StorageUnavailable):
            await client.load_top_entries(5)


@pytest.mark.asyncio
async def test_undecodable_body_is_not_an_empty_result():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    async with _mock_client(handler) as client:
        with pytest.raises(StorageUnavailable):
            await client.load_top_entries(5)
        with pytest.raises(StorageUnavailable):
            await client.load_single_entry()


@pytest.mark.asyncio
async def test_malformed_entry_is_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"player_name": "Bob"}])

    async with _mock_client(handler) as client:
        with pytest.raises(StorageUnavailable):
            await client.load_top_entries(5)


@pytest.mark.asyncio
async def test_count_is_sent_as_query_parameter():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["count"] = request.url.params.get("count")
        return httpx.Response(200, json=[])

    async with _mock_client(handler) as client:
        assert await client.load_top_entries(7) == []
    assert seen == {"path": "/scores/top", "count": "7"}


@pytest.mark.asyncio
async def test_save_on_missing_route_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Not Found"})

    async with _mock_client(handler) as client:
        with pytest.raises(StorageUnavailable):
            await client.save_score("Alice", 1)
        with pytest.raises(StorageUnavailable):
            await client.load_top_entries(5)
        assert await client.load_single_entry() is None
        assert await client.check_ready() is False


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[{"ready": True}], "ready", 1])
async def test_health_body_must_be_an_object(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    async with _mock_client(handler) as client:
        assert await client.check_ready() is False


@pytest.mark.asyncio
async def test_health_that_is_not_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"ok")

    async with _mock_client(handler) as client:
        assert await client.check_ready() is False
