import asyncio
from typing import List, Optional
from sortedcontainers import SortedKeyList
from ..errors import NotFoundError, StorageUnavailable, ValidationError
from ..logger import get_logger
from ..models.data import ScoreRec, validate_player_name, validate_score
from .journal import Journal, MemoryJournal

logger = get_logger()

class RankedStore:
    """
    Holds every score record and serves ranked reads.

    Records are indexed by (-score, sequence_id), so the first entry is the
    maximum and a top-N read is a slice of the first N entries. Writes are
    serialized by a lock so sequence ids follow acceptance order.
    """

    def __init__(self, journal: Optional[Journal] = None):
        self.journal = journal or MemoryJournal()
        self._index = SortedKeyList(key=lambda rec: rec.rank_key)
        self._last_sequence_id = 0
        self._lock = asyncio.Lock()
        self._initialized = False

    def __len__(self):
        return len(self._index)

    @property
    def size(self) -> int:
        return len(self._index)

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        """Open the journal and rebuild the index from it"""
        if self._initialized:
            return

        async with self._lock:
            if self._initialized:
                return
            try:
                await self.journal.initialize()
                entries = await self.journal.replay()
                self._load(entries)
            except Exception:
                await self.journal.close()
                raise
            self._initialized = True
            logger.info(f"Ranked store initialized with {len(self._index)} records")

    def _load(self, entries: List[dict]):
        records = []
        last = 0
        for entry in entries:
            try:
                rec = ScoreRec(entry)
            except (KeyError, TypeError, ValueError) as e:
                raise StorageUnavailable(f"Invalid journal entry {entry!r}: {e}") from e
            if rec.sequence_id <= last:
                raise StorageUnavailable(
                    f"Journal out of order: sequence id {rec.sequence_id} after {last}"
                )
            last = rec.sequence_id
            records.append(rec)
        self._index.clear()
        self._index.update(records)
        self._last_sequence_id = last

    async def close(self):
        async with self._lock:
            await self.journal.close()
            self._initialized = False

    async def insert(self, player_name: str, score: int) -> int:
        """Append a new record and return its sequence id"""
        name = validate_player_name(player_name)
        score = validate_score(score)

        async with self._lock:
            if not self._initialized:
                raise StorageUnavailable("Ranked store not initialized")
            rec = ScoreRec({
                'sequence_id': self._last_sequence_id + 1,
                'player_name': name,
                'score': score
            })
            # The id is spent even if the write fails; a failed write may still have landed
            self._last_sequence_id = rec.sequence_id
            await self.journal.append(rec)
            self._index.add(rec)

        logger.debug(f"Inserted {rec!r}")
        return rec.sequence_id

    def fetch_max(self) -> ScoreRec:
        """Highest score; the earliest insert wins among equal scores"""
        if not self._index:
            raise NotFoundError("No scores recorded")
        return self._index[0]

    def fetch_top(self, n: int) -> List[ScoreRec]:
        """Up to n records, descending by score then ascending by sequence id"""
        if isinstance(n, bool) or not isinstance(n, int):
            raise ValidationError("n must be an integer")
        if n < 0:
            raise ValidationError("n must be non-negative")
        if n == 0:
            return []
        return list(self._index.islice(0, n))
