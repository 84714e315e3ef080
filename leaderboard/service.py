import time
from typing import List
from .database import RankedStore, create_journal
from .errors import StorageUnavailable, ValidationError
from .logger import get_logger
from .models.data import Leader

logger = get_logger()

class LeaderboardService:
    """
    Request/response boundary over a RankedStore.

    One instance per process, built by the application factory and handed to
    the routes; nothing here is a module-level singleton.
    """

    def __init__(self, store: RankedStore, max_count: int = 100):
        if max_count < 0:
            raise ValueError("max_count must be non-negative")
        self.store = store
        self.max_count = max_count
        self.start_time = time.time()

    @classmethod
    def from_config(cls, storage_config, service_config) -> 'LeaderboardService':
        journal = create_journal(storage_config)
        return cls(RankedStore(journal), max_count=service_config.MAX_COUNT)

    @property
    def is_ready(self) -> bool:
        return self.store.initialized

    async def initialize(self):
        await self.store.initialize()
        logger.info(f"Leaderboard service ready ({type(self.store.journal).__name__})")

    async def close(self):
        await self.store.close()

    def _ensure_ready(self):
        if not self.is_ready:
            raise StorageUnavailable("Leaderboard store is not ready")

    async def submit_score(self, player_name: str, score: int) -> None:
        """Record a score; the created record is not returned"""
        self._ensure_ready()
        sequence_id = await self.store.insert(player_name, score)
        logger.info(f"Recorded score {score} for {player_name.strip()!r} (#{sequence_id})")

    async def get_top_score(self) -> Leader:
        """Highest score, or NotFoundError when nothing is recorded"""
        self._ensure_ready()
        return self.store.fetch_max().to_leader()

    async def get_top_scores(self, count: int) -> List[Leader]:
        """Top scores, descending, with count clamped to max_count"""
        self._ensure_ready()
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError("count must be an integer")
        if count < 0:
            raise ValidationError("count must be non-negative")
        if count > self.max_count:
            logger.debug(f"Clamping requested count {count} to {self.max_count}")
            count = self.max_count
        return [rec.to_leader() for rec in self.store.fetch_top(count)]

    def health(self) -> dict:
        return {
            'uptime': time.time() - self.start_time,
            'ready': self.is_ready,
            'records': self.store.size,
        }
