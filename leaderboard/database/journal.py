import os
from typing import List
import aiofiles
import orjson
from ..errors import StorageUnavailable
from ..logger import get_logger
from ..models.data import ScoreRec

logger = get_logger()

class Journal:
    """Append-only log of score records, replayed in sequence order on startup"""

    durable = False

    async def initialize(self):
        pass

    async def replay(self) -> List[dict]:
        return []

    async def append(self, rec: ScoreRec):
        pass

    async def close(self):
        pass

class MemoryJournal(Journal):
    """No persistence; the store lives and dies with the process"""

class FileJournal(Journal):
    """JSON-lines log, one record per line, flushed after every append"""

    durable = True

    def __init__(self, path: str):
        self.path = path
        self._file = None
        self._open = False
        # Length of the log up to the last acknowledged entry
        self._size = 0

    async def initialize(self):
        if self._open:
            return
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            await self._repair_tail()
            self._file = await aiofiles.open(self.path, 'ab')
            self._size = os.path.getsize(self.path)
            self._open = True
            logger.info(f"Score journal opened at {self.path}")
        except OSError as e:
            logger.error(f"Failed to open score journal {self.path}: {e}")
            raise StorageUnavailable(f"Score journal unavailable: {e}") from e

    async def _repair_tail(self):
        """Drop a torn final line left by an interrupted write"""
        if not os.path.exists(self.path):
            return
        async with aiofiles.open(self.path, 'rb') as f:
            content = await f.read()
        if not content or content.endswith(b'\n'):
            return
        good = content.rfind(b'\n') + 1
        logger.warning(f"Truncating {len(content) - good} bytes of incomplete entry from {self.path}")
        async with aiofiles.open(self.path, 'r+b') as f:
            await f.truncate(good)

    async def _discard_failed_write(self):
        """Close the handle and cut the log back to the last acknowledged entry"""
        file, self._file = self._file, None
        try:
            await file.close()
        except OSError as e:
            logger.warning(f"Discarding buffered journal data for {self.path}: {e}")
        async with aiofiles.open(self.path, 'r+b') as f:
            await f.truncate(self._size)

    async def _reopen(self):
        try:
            async with aiofiles.open(self.path, 'r+b') as f:
                await f.truncate(self._size)
            self._file = await aiofiles.open(self.path, 'ab')
            logger.info(f"Score journal reopened at {self.path}")
        except OSError as e:
            logger.error(f"Failed to reopen score journal {self.path}: {e}")
            raise StorageUnavailable(f"Score journal unavailable: {e}") from e

    async def replay(self) -> List[dict]:
        if not os.path.exists(self.path):
            return []
        entries = []
        try:
            async with aiofiles.open(self.path, 'rb') as f:
                lineno = 0
                async for line in f:
                    lineno += 1
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entries.append(orjson.loads(line))
                    except orjson.JSONDecodeError as e:
                        raise StorageUnavailable(f"Corrupt score journal {self.path} at line {lineno}: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read score journal {self.path}: {e}")
            raise StorageUnavailable(f"Score journal unavailable: {e}") from e
        return entries

    async def append(self, rec: ScoreRec):
        if not self._open:
            raise StorageUnavailable("Score journal is not open")
        if self._file is None:
            await self._reopen()
        data = orjson.dumps(rec.to_dict()) + b'\n'
        try:
            await self._file.write(data)
            await self._file.flush()
        except OSError as e:
            logger.error(f"Failed to append to score journal {self.path}: {e}")
            try:
                await self._discard_failed_write()
            except OSError as cleanup_error:
                # Left closed; the next append truncates again before writing
                logger.error(f"Failed to roll back score journal {self.path}: {cleanup_error}")
            raise StorageUnavailable(f"Score journal unavailable: {e}") from e
        self._size += len(data)

    async def close(self):
        self._open = False
        if self._file is not None:
            file, self._file = self._file, None
            await file.close()

def create_journal(config) -> Journal:
    """Build the journal selected by a StorageConfig"""
    if config.BACKEND == 'file':
        return FileJournal(config.LOG_PATH)
    if config.BACKEND == 'postgres':
        from .connection import PostgresJournal
        return PostgresJournal(config)
    return MemoryJournal()
