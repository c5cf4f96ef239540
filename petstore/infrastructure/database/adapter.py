"""
PostgreSQL Database Adapter

Provides async database operations using psycopg3 for the pet catalog.
Handles connection management, query execution, transactions and error
translation.

The adapter holds no per-call state: every call borrows a pooled connection,
and ``transaction()`` pins one connection for the duration of a block. A single
adapter instance is therefore shared by all concurrent requests.
"""

# Standard library imports
import builtins
import logging
from collections.abc import AsyncGenerator, Generator, Sequence
from contextlib import asynccontextmanager, contextmanager
from typing import Any

# Third-party imports
import psycopg
from psycopg import AsyncConnection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool, PoolTimeout

# Local imports
from petstore.application.interfaces.exceptions import (
    ConnectionError,
    IntegrityError,
    RepositoryError,
    TimeoutError,
    TransactionError,
)

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class _QueryExecutor:
    """Query helpers shared by the pooled adapter and pinned transactions."""

    _acquire_timeout: float

    def acquire_connection(self) -> Any:
        raise NotImplementedError

    @contextmanager
    def _translate_errors(self, operation: str, query: str) -> Generator[None, None, None]:
        """Map driver errors onto repository exceptions."""
        try:
            yield
        except psycopg.IntegrityError as e:
            constraint = getattr(e.diag, "constraint_name", None) or type(e).__name__
            logger.error(f"Integrity constraint violated: {e} | Query: {query[:100]}...")
            raise IntegrityError(constraint, str(e)) from e
        except psycopg.Error as e:
            logger.error(f"{operation} failed: {e} | Query: {query[:100]}...")
            raise RepositoryError(f"{operation} failed: {e}", e) from e
        except builtins.TimeoutError as e:
            logger.error(f"{operation} timed out: {query[:100]}...")
            raise TimeoutError(operation, self._acquire_timeout) from e

    async def execute_query(self, query: str, *args: Any) -> int:
        """
        Execute a SQL statement that doesn't return data.

        Args:
            query: SQL query string with %s placeholders
            *args: Query parameters

        Returns:
            Number of affected rows

        Raises:
            IntegrityError: If a constraint is violated
            RepositoryError: If query execution fails
        """
        async with self.acquire_connection() as conn:
            with self._translate_errors("execute_query", query):
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, args)
                    logger.debug(f"Query executed: {query[:100]}... | Rows: {cur.rowcount}")
                    return cur.rowcount

    async def fetch_one(self, query: str, *args: Any) -> Record | None:
        """
        Fetch a single record from the database.

        Returns:
            Record if found, None otherwise
        """
        async with self.acquire_connection() as conn:
            with self._translate_errors("fetch_one", query):
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, args)
                    result = await cur.fetchone()
                    logger.debug(f"Fetch one query: {query[:100]}... | Found: {result is not None}")
                    return result

    async def fetch_all(self, query: str, *args: Any) -> list[Record]:
        """
        Fetch all records from the database.

        Returns:
            List of records
        """
        async with self.acquire_connection() as conn:
            with self._translate_errors("fetch_all", query):
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, args)
                    result = await cur.fetchall()
                    logger.debug(f"Fetch all query: {query[:100]}... | Count: {len(result)}")
                    return result

    async def fetch_value(self, query: str, *args: Any) -> Any:
        """
        Fetch the first column of the first row.

        Returns:
            The value, or None when the query returns no rows
        """
        record = await self.fetch_one(query, *args)
        if record is None:
            return None
        return next(iter(record.values()))

    async def fetch_values(self, query: str, *args: Any) -> list[Any]:
        """
        Fetch values from a single column, in the order the store returns them.
        """
        records = await self.fetch_all(query, *args)
        return [next(iter(record.values())) for record in records]

    async def execute_batch(self, query: str, args_list: Sequence[Sequence[Any]]) -> None:
        """
        Execute a statement once per parameter tuple, in order.
        """
        if not args_list:
            return
        async with self.acquire_connection() as conn:
            with self._translate_errors("execute_batch", query):
                async with conn.cursor() as cur:
                    await cur.executemany(query, args_list)
                    logger.debug(
                        f"Batch query executed: {query[:100]}... | Batch size: {len(args_list)}"
                    )


class PostgreSQLTransaction(_QueryExecutor):
    """
    Query executor pinned to one connection inside an open transaction.

    Obtained from ``PostgreSQLAdapter.transaction()``; not meant to be built
    directly or shared between tasks.
    """

    def __init__(self, connection: AsyncConnection, acquire_timeout: float) -> None:
        self._connection = connection
        self._acquire_timeout = acquire_timeout

    @property
    def connection(self) -> AsyncConnection:
        return self._connection

    @asynccontextmanager
    async def acquire_connection(self) -> AsyncGenerator[AsyncConnection, None]:
        yield self._connection


class PostgreSQLAdapter(_QueryExecutor):
    """
    PostgreSQL database adapter using psycopg3.

    Provides high-level database operations with error handling,
    connection management, and transaction support.
    """

    def __init__(self, pool: AsyncConnectionPool, acquire_timeout: float = 30.0) -> None:
        """
        Initialize adapter with connection pool.

        Args:
            pool: psycopg3 async connection pool
            acquire_timeout: Max seconds to wait for a free pooled connection
        """
        self._pool = pool
        self._acquire_timeout = acquire_timeout

    @property
    def pool(self) -> AsyncConnectionPool:
        """Get the connection pool."""
        return self._pool

    @property
    def acquire_timeout(self) -> float:
        return self._acquire_timeout

    @asynccontextmanager
    async def acquire_connection(self) -> AsyncGenerator[AsyncConnection, None]:
        """
        Acquire a database connection from the pool.

        Waits at most ``acquire_timeout`` seconds when the pool is exhausted.

        Yields:
            Database connection

        Raises:
            TimeoutError: If no connection frees up in time
            ConnectionError: If connection cannot be acquired
        """
        try:
            async with self._pool.connection(timeout=self._acquire_timeout) as connection:
                yield connection
        except PoolTimeout as e:
            logger.error(f"Connection acquisition timed out after {self._acquire_timeout}s: {e}")
            raise TimeoutError("acquire_connection", self._acquire_timeout) from e
        except psycopg.OperationalError as e:
            logger.error(f"Failed to acquire connection: {e}")
            raise ConnectionError(f"Failed to acquire database connection: {e}") from e

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[PostgreSQLTransaction, None]:
        """
        Run a block of statements atomically on one pooled connection.

        Commits when the block exits normally; rolls back when it raises or
        the calling task is cancelled.

        Yields:
            Executor bound to the transaction's connection

        Raises:
            TransactionError: If the transaction cannot be started or committed
        """
        async with self.acquire_connection() as conn:
            try:
                async with conn.transaction():
                    logger.debug("Transaction started")
                    yield PostgreSQLTransaction(conn, self._acquire_timeout)
            except psycopg.Error as e:
                # Statement errors are already translated; this is begin/commit
                logger.error(f"Transaction failed: {e}")
                raise TransactionError(f"Transaction failed: {e}", e) from e
            except BaseException:
                logger.debug("Transaction rolled back")
                raise
            logger.debug("Transaction committed")

    async def health_check(self) -> bool:
        """
        Perform a health check on the database connection.

        Returns:
            True if database is healthy, False otherwise
        """
        try:
            return await self.fetch_value("SELECT 1") == 1
        except RepositoryError as e:
            logger.error(f"Health check failed: {e}")
            return False

    def get_connection_info(self) -> dict[str, Any]:
        """
        Get information about the connection pool.

        Returns:
            Dictionary with connection pool statistics
        """
        stats = self._pool.get_stats()
        return {
            "max_size": self._pool.max_size,
            "min_size": self._pool.min_size,
            "pool_size": stats.get("pool_size", 0),
            "pool_available": stats.get("pool_available", 0),
            "requests_waiting": stats.get("requests_waiting", 0),
            "pool_status": "active" if not self._pool.closed else "closed",
        }

    def __str__(self) -> str:
        """String representation of the adapter."""
        return f"PostgreSQLAdapter(Pool(max_size={self._pool.max_size}), timeout={self._acquire_timeout})"
