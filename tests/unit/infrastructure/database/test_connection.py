"""
Unit tests for database connection management.

The psycopg pool is replaced with a mock; no server is needed.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from psycopg_pool import PoolTimeout

from petstore.application.interfaces.exceptions import ConnectionError
from petstore.infrastructure.config import DatabaseConfig
from petstore.infrastructure.database.adapter import PostgreSQLAdapter
from petstore.infrastructure.database.connection import DatabaseConnection

POOL_CLASS = "petstore.infrastructure.database.connection.AsyncConnectionPool"


@pytest.fixture
def config():
    return DatabaseConfig(
        host="db.internal",
        database="petstore",
        password="secret",
        max_retry_attempts=3,
        retry_delay=0.0,
        pool_timeout=4.0,
        connect_timeout=2.0,
    )


@pytest.fixture
def mock_pool():
    pool = MagicMock()
    pool.open = AsyncMock()
    pool.close = AsyncMock()
    pool.closed = False
    cursor = AsyncMock()
    connection = MagicMock()
    connection.cursor.return_value.__aenter__.return_value = cursor
    connection.cursor.return_value.__aexit__.return_value = False
    pool.connection.return_value.__aenter__.return_value = connection
    pool.connection.return_value.__aexit__.return_value = False
    return pool


@pytest.mark.unit
class TestDatabaseConnect:
    """Test pool start-up with bounded retry."""

    @pytest.mark.asyncio
    async def test_connect_opens_pool(self, config, mock_pool):
        with patch(POOL_CLASS, return_value=mock_pool) as pool_class:
            connection = DatabaseConnection(config)
            pool = await connection.connect()

        assert pool is mock_pool
        assert connection.is_connected
        mock_pool.open.assert_awaited_once_with(wait=True, timeout=2.0)

        kwargs = pool_class.call_args.kwargs
        assert kwargs["min_size"] == 1
        assert kwargs["max_size"] == 5
        assert kwargs["timeout"] == 4.0
        assert kwargs["open"] is False
        assert "db.internal" in kwargs["conninfo"]

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, config, mock_pool):
        with patch(POOL_CLASS, return_value=mock_pool) as pool_class:
            connection = DatabaseConnection(config)
            await connection.connect()
            await connection.connect()

        assert pool_class.call_count == 1

    @pytest.mark.asyncio
    async def test_connect_retries_then_succeeds(self, config, mock_pool):
        mock_pool.open.side_effect = [PoolTimeout("not ready"), OSError("refused"), None]

        with patch(POOL_CLASS, return_value=mock_pool) as pool_class:
            connection = DatabaseConnection(config)
            await connection.connect()

        assert pool_class.call_count == 3
        assert mock_pool.close.await_count == 2
        assert connection.is_connected

    @pytest.mark.asyncio
    async def test_connect_gives_up_after_max_attempts(self, config, mock_pool):
        mock_pool.open.side_effect = PoolTimeout("not ready")

        with patch(POOL_CLASS, return_value=mock_pool):
            connection = DatabaseConnection(config)
            with pytest.raises(ConnectionError, match="after 3 attempts"):
                await connection.connect()

        assert mock_pool.open.await_count == 3
        assert not connection.is_connected

    @pytest.mark.asyncio
    async def test_connect_waits_between_attempts(self, mock_pool):
        config = DatabaseConfig(max_retry_attempts=2, retry_delay=1.5)
        mock_pool.open.side_effect = [PoolTimeout("not ready"), None]
        sleep = AsyncMock()

        with patch(POOL_CLASS, return_value=mock_pool), patch(
            "petstore.infrastructure.database.connection.asyncio.sleep", sleep
        ):
            await DatabaseConnection(config).connect()

        sleep.assert_awaited_once_with(1.5)


@pytest.mark.unit
class TestDatabaseLifecycle:
    """Test pool access and shutdown."""

    def test_pool_before_connect_raises(self, config):
        with pytest.raises(ConnectionError, match="not open"):
            _ = DatabaseConnection(config).pool

    @pytest.mark.asyncio
    async def test_disconnect_closes_pool(self, config, mock_pool):
        with patch(POOL_CLASS, return_value=mock_pool):
            connection = DatabaseConnection(config)
            await connection.connect()
            await connection.disconnect()
            await connection.disconnect()

        mock_pool.close.assert_awaited_once()
        assert connection.is_closed
        assert not connection.is_connected

    @pytest.mark.asyncio
    async def test_connect_after_disconnect_raises(self, config):
        connection = DatabaseConnection(config)
        await connection.disconnect()

        with pytest.raises(ConnectionError, match="has been closed"):
            await connection.connect()

    @pytest.mark.asyncio
    async def test_create_adapter(self, config, mock_pool):
        with patch(POOL_CLASS, return_value=mock_pool):
            connection = DatabaseConnection(config)
            await connection.connect()

        adapter = connection.create_adapter()

        assert isinstance(adapter, PostgreSQLAdapter)
        assert adapter.pool is mock_pool
        assert adapter.acquire_timeout == 4.0

    def test_str(self, config):
        assert str(DatabaseConnection(config)) == (
            "DatabaseConnection(db.internal:5432/petstore, disconnected)"
        )
