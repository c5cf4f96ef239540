"""
Database Connection Management

Owns the psycopg3 async connection pool for the service. The pool is opened
once at start-up with a bounded retry, and closed at shutdown.
"""

# Standard library imports
import asyncio
import logging
import time

# Third-party imports
import psycopg
from psycopg_pool import AsyncConnectionPool

# Local imports
from petstore.application.interfaces.exceptions import ConnectionError
from petstore.infrastructure.config import DatabaseConfig

from .adapter import PostgreSQLAdapter

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Manages the database connection pool lifecycle.

    Retries the initial connection ``max_retry_attempts`` times, sleeping
    ``retry_delay`` seconds between attempts.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config
        self._pool: AsyncConnectionPool | None = None
        self._is_closed = False

    @property
    def pool(self) -> AsyncConnectionPool:
        """
        Raises:
            ConnectionError: If the pool has not been opened
        """
        if self._pool is None:
            raise ConnectionError("Database connection pool is not open")
        return self._pool

    @property
    def is_connected(self) -> bool:
        return self._pool is not None and not self._pool.closed

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    def _create_pool(self) -> AsyncConnectionPool:
        return AsyncConnectionPool(
            conninfo=self.config.build_dsn(),
            min_size=self.config.min_pool_size,
            max_size=self.config.max_pool_size,
            timeout=self.config.pool_timeout,
            open=False,
        )

    async def connect(self) -> AsyncConnectionPool:
        """
        Establish database connection pool with retry logic.

        Returns:
            psycopg3 async connection pool

        Raises:
            ConnectionError: If connection fails after all retries
        """
        if self._is_closed:
            raise ConnectionError("Connection manager has been closed")

        if self.is_connected and self._pool is not None:
            return self._pool

        start_time = time.time()
        attempts = self.config.max_retry_attempts

        for attempt in range(attempts):
            pool = self._create_pool()
            try:
                logger.info(
                    f"Connecting to database (attempt {attempt + 1}/{attempts}): "
                    f"{self.config.host}:{self.config.port}/{self.config.database}"
                )
                await pool.open(wait=True, timeout=self.config.connect_timeout)

                async with pool.connection() as conn, conn.cursor() as cur:
                    await cur.execute("SELECT 1")
                    await cur.fetchone()

                self._pool = pool
                logger.info(
                    f"Database connected successfully. Pool size: "
                    f"{self.config.min_pool_size}-{self.config.max_pool_size}"
                )
                return pool

            except (TimeoutError, psycopg.OperationalError, OSError) as e:
                await pool.close()

                if attempt < attempts - 1:
                    logger.warning(
                        f"Connection attempt {attempt + 1} failed: {e}. "
                        f"Retrying in {self.config.retry_delay:.2f} seconds..."
                    )
                    await asyncio.sleep(self.config.retry_delay)
                    continue

                total_time = time.time() - start_time
                logger.error(
                    f"Failed to connect to database after {attempts} attempts "
                    f"in {total_time:.2f} seconds: {e}"
                )
                raise ConnectionError(
                    f"Failed to connect to database after {attempts} attempts: {e}"
                ) from e

        raise ConnectionError("Failed to establish database connection")

    async def disconnect(self) -> None:
        """Close the connection pool. Safe to call more than once."""
        if self._is_closed:
            return

        logger.info("Disconnecting from database...")
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        self._is_closed = True
        logger.info("Database disconnected")

    def create_adapter(self) -> PostgreSQLAdapter:
        """Build an adapter over the open pool."""
        return PostgreSQLAdapter(self.pool, acquire_timeout=self.config.pool_timeout)

    def __str__(self) -> str:
        status = "connected" if self.is_connected else "disconnected"
        return (
            f"DatabaseConnection({self.config.host}:{self.config.port}/"
            f"{self.config.database}, {status})"
        )
