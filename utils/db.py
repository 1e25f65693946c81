"""
Database utilities for PostgreSQL read access.

Provides the pooled store client shared by the API service. The client is
constructed once at startup, opened by the application lifespan, shared
read-only across requests and closed at shutdown.

Usage:
    db = Database()
    await db.open()
    rows = await db.fetch_all("SELECT name FROM charging_stations")
    await db.close()
"""

import logging
from typing import Any, Optional

import psycopg
from psycopg.conninfo import conninfo_to_dict, make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from utils.config import settings

logger = logging.getLogger(__name__)

_STORE_ERRORS = (psycopg.Error, PoolTimeout)


class StoreError(Exception):
    """Raised when the store cannot be reached or a query fails."""


class Database:
    """Async PostgreSQL client backed by a psycopg connection pool.

    Every call to fetch_all() borrows its own connection, so queries issued
    together run in parallel up to the pool's max_size.
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        sslmode: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the client without connecting.

        Args:
            dsn: Connection string, defaults to settings.DATABASE_URL
            sslmode: libpq sslmode, defaults to settings.db_sslmode
            min_size: Minimum pooled connections, defaults to settings.DB_POOL_MIN_SIZE
            max_size: Maximum pooled connections, defaults to settings.DB_POOL_MAX_SIZE
            timeout: Seconds to wait for a connection, defaults to settings.DB_POOL_TIMEOUT
        """
        self.dsn = dsn or settings.DATABASE_URL
        self.sslmode = sslmode or settings.db_sslmode
        self.min_size = settings.DB_POOL_MIN_SIZE if min_size is None else min_size
        self.max_size = settings.DB_POOL_MAX_SIZE if max_size is None else max_size
        self.timeout = settings.DB_POOL_TIMEOUT if timeout is None else timeout
        self.pool: Optional[AsyncConnectionPool] = None

    @property
    def conninfo(self) -> str:
        """Connection string with the configured sslmode applied."""
        return make_conninfo(self.dsn, sslmode=self.sslmode)

    @property
    def is_open(self) -> bool:
        return self.pool is not None

    def _describe(self) -> str:
        # Never log credentials.
        params = conninfo_to_dict(self.conninfo)
        return f"{params.get('host', 'localhost')}:{params.get('port', 5432)}/{params.get('dbname', '')}"

    def _make_pool(self) -> AsyncConnectionPool:
        return AsyncConnectionPool(
            self.conninfo,
            min_size=self.min_size,
            max_size=self.max_size,
            timeout=self.timeout,
            kwargs={"row_factory": dict_row},
            open=False,
        )

    async def open(self) -> None:
        """Open the connection pool without waiting for the store.

        The pool connects in the background and keeps reconnecting while the
        store is unreachable; until then fetch_all() raises StoreError once
        DB_POOL_TIMEOUT expires.
        """
        if self.pool is not None:
            return

        pool = self._make_pool()
        await pool.open(wait=False)
        self.pool = pool
        logger.info(
            "Database pool opened: target=%s, sslmode=%s, max_size=%d",
            self._describe(), self.sslmode, self.max_size,
        )

    async def close(self) -> None:
        """Close the connection pool and release all connections."""
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    async def fetch_all(self, query: str) -> list[dict[str, Any]]:
        """Run a parameterless read query on a pooled connection.

        Args:
            query: SQL statement

        Returns:
            List of rows as dicts keyed by column name

        Raises:
            StoreError: If the pool is not open or the query fails
        """
        if self.pool is None:
            raise StoreError("Database pool is not open")

        try:
            async with self.pool.connection() as conn:
                cur = await conn.execute(query)
                return await cur.fetchall()
        except _STORE_ERRORS as e:
            raise StoreError(f"Query failed: {e}") from e

    async def __aenter__(self) -> "Database":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
