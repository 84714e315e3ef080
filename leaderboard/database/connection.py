import asyncio
from typing import List
import asyncpg
from ..errors import StorageUnavailable
from ..logger import get_logger
from ..models.data import ScoreRec
from .journal import Journal

logger = get_logger()

# Errors that mean the database could not be reached or did not answer
CONNECTION_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
)

class PostgresJournal(Journal):
    """Score log kept in a single PostgreSQL table"""

    durable = True

    def __init__(self, config):
        self.config = config
        self.pool = None
        self.retry_count = 0
        self.max_retries = config.max_retries
        self.retry_delay = config.retry_delay
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self):
        """Create the connection pool and the log table"""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:  # Double check after acquiring lock
                return

            while self.retry_count < self.max_retries:
                try:
                    self.pool = await asyncpg.create_pool(
                        host=self.config.HOST,
                        port=self.config.PORT,
                        database=self.config.DATABASE,
                        user=self.config.USER,
                        password=self.config.PASSWORD,
                        min_size=self.config.MIN_SIZE,
                        max_size=self.config.MAX_SIZE,
                        command_timeout=self.config.COMMAND_TIMEOUT,
                        setup=self._setup_connection
                    )
                    async with self.pool.acquire() as conn:
                        await conn.execute('''
                            CREATE TABLE IF NOT EXISTS score_log (
                                sequence_id BIGINT PRIMARY KEY,
                                player_name TEXT NOT NULL,
                                score BIGINT NOT NULL
                            )
                        ''')
                    self.retry_count = 0
                    self._initialized = True
                    logger.info("Database connection initialized successfully")
                    return
                except CONNECTION_ERRORS as e:
                    self.retry_count += 1
                    logger.error(f"Failed to initialize database connection (attempt {self.retry_count}/{self.max_retries}): {e}")
                    await self.close()
                    if self.retry_count < self.max_retries:
                        await asyncio.sleep(self.retry_delay * self.retry_count)
                    else:
                        logger.error("Max retries reached for database initialization")
                        self.retry_count = 0
                        raise StorageUnavailable(f"Database unavailable: {e}") from e

    async def _setup_connection(self, connection):
        """Setup connection with proper settings"""
        await connection.execute('SET statement_timeout = 30000')
        await connection.execute('SET idle_in_transaction_session_timeout = 30000')

    async def replay(self) -> List[dict]:
        if not self._initialized:
            raise StorageUnavailable("Database connection not initialized")
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch('''
                    SELECT sequence_id, player_name, score
                    FROM score_log
                    ORDER BY sequence_id
                ''')
        except CONNECTION_ERRORS as e:
            logger.error(f"Failed to replay score log: {e}")
            raise StorageUnavailable(f"Database unavailable: {e}") from e
        return [dict(row) for row in rows]

    async def append(self, rec: ScoreRec):
        if not self._initialized:
            raise StorageUnavailable("Database connection not initialized")
        try:
            async with self.pool.acquire() as conn:
                await conn.execute('''
                    INSERT INTO score_log (sequence_id, player_name, score)
                    VALUES ($1, $2, $3)
                ''', rec.sequence_id, rec.player_name, rec.score)
        except CONNECTION_ERRORS as e:
            logger.error(f"Database error appending score {rec.sequence_id}: {e}")
            raise StorageUnavailable(f"Database unavailable: {e}") from e

    async def close(self):
        """Close database connections"""
        if self.pool:
            await self.pool.close()
            self.pool = None
        self._initialized = False
