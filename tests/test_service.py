"""Tests for the query service boundary."""

import pytest

from leaderboard.config import ServiceConfig, StorageConfig
from leaderboard.database import FileJournal, RankedStore
from leaderboard.errors import NotFoundError, StorageUnavailable, ValidationError
from leaderboard.models.data import Leader
from leaderboard.service import LeaderboardService


@pytest.mark.asyncio
async def test_submit_and_read_back(service: LeaderboardService):
    await service.initialize()
    assert await service.submit_score("Alice", 50) is None
    await service.submit_score("Bob", 75)
    await service.submit_score("Carl", 60)

    assert await service.get_top_score() == Leader("Bob", 75)
    assert await service.get_top_scores(2) == [Leader("Bob", 75), Leader("Carl", 60)]


@pytest.mark.asyncio
async def test_no_data_signal(service: LeaderboardService):
    await service.initialize()
    with pytest.raises(NotFoundError):
        await service.get_top_score()
    assert await service.get_top_scores(5) == []


@pytest.mark.asyncio
async def test_count_is_clamped():
    service = LeaderboardService(RankedStore(), max_count=3)
    await service.initialize()
    for i in range(10):
        await service.submit_score(f"p{i}", i)

    top = await service.get_top_scores(1000)
    assert [leader.score for leader in top] == [9, 8, 7]
    assert await service.get_top_scores(0) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [-1, "5", 2.0, None])
async def test_invalid_count(service: LeaderboardService, count):
    await service.initialize()
    with pytest.raises(ValidationError):
        await service.get_top_scores(count)


@pytest.mark.asyncio
async def test_not_ready_until_initialized(service: LeaderboardService):
    assert not service.is_ready
    assert service.health()["ready"] is False
    with pytest.raises(StorageUnavailable):
        await service.submit_score("Alice", 1)
    with pytest.raises(StorageUnavailable):
        await service.get_top_score()

    await service.initialize()
    assert service.is_ready
    await service.close()
    assert not service.is_ready


@pytest.mark.asyncio
async def test_health_reports_record_count(service: LeaderboardService):
    await service.initialize()
    await service.submit_score("Alice", 1)
    await service.submit_score("Bob", 2)

    health = service.health()
    assert health["records"] == 2
    assert health["ready"] is True
    assert health["uptime"] >= 0


def test_from_config_uses_configured_backend(tmp_path):
    service = LeaderboardService.from_config(
        StorageConfig(BACKEND="file", LOG_PATH=str(tmp_path / "scores.log")),
        ServiceConfig(MAX_COUNT=25),
    )
    assert isinstance(service.store.journal, FileJournal)
    assert service.max_count == 25


def test_settings_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LEADERBOARD_STORAGE_BACKEND", "file")
    monkeypatch.setenv("LEADERBOARD_STORAGE_LOG_PATH", str(tmp_path / "env.log"))
    monkeypatch.setenv("LEADERBOARD_MAX_COUNT", "25")
    monkeypatch.setenv("LEADERBOARD_PORT", "9000")
    monkeypatch.setenv("LEADERBOARD_STORAGE_PORT", "6543")

    storage = StorageConfig()
    service_config = ServiceConfig()
    assert storage.BACKEND == "file"
    assert storage.LOG_PATH == str(tmp_path / "env.log")
    assert storage.PORT == 6543
    assert service_config.MAX_COUNT == 25
    assert service_config.PORT == 9000
