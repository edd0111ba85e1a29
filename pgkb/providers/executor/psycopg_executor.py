"""psycopg 3 query executor.

Wraps a :class:`psycopg_pool.AsyncConnectionPool` to implement
:class:`IQueryExecutor`.  Rows come back as dictionaries (``dict_row``).
Every call borrows a connection from the pool and returns it when finished;
``pool.connection()`` commits on a clean exit and rolls back on error.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing, asynccontextmanager
from typing import Any

import structlog
from psycopg import AsyncConnection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from pgkb.interfaces.query_executor import IQueryExecutor, Row
from pgkb.sql.statement import SQLStatement

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "psycopg"


async def _execute_on(conn: AsyncConnection[Any], statement: SQLStatement) -> list[Row]:
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(statement.text, statement.values)
        # No result set (plain DELETE/UPDATE): nothing to fetch.
        if cur.description is None:
            return []
        return await cur.fetchall()


async def _stream_on(conn: AsyncConnection[Any], statement: SQLStatement) -> AsyncIterator[Row]:
    async with conn.cursor(row_factory=dict_row) as cur:
        async for row in cur.stream(statement.text, statement.values):
            yield row


class _ConnectionExecutor(IQueryExecutor):
    """Executor pinned to one connection, handed out by ``transaction()``."""

    def __init__(self, conn: AsyncConnection[Any]) -> None:
        self._conn = conn

    async def execute(self, statement: SQLStatement) -> list[Row]:
        return await _execute_on(self._conn, statement)

    async def stream(self, statement: SQLStatement) -> AsyncIterator[Row]:
        async with aclosing(_stream_on(self._conn, statement)) as rows:
            async for row in rows:
                yield row

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[IQueryExecutor]:
        # Nested blocks become savepoints.
        async with self._conn.transaction():
            yield self

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME


class PsycopgQueryExecutor(IQueryExecutor):
    """Executor backed by a psycopg connection pool.

    The pool is either injected (the caller owns its lifecycle) or created
    from a connection string, in which case :meth:`open` / :meth:`close` (or
    ``async with``) manage it.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool | None = None,
        *,
        conninfo: str = "",
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        if pool is None:
            if not conninfo:
                msg = "Either a pool or a conninfo string is required"
                raise ValueError(msg)
            pool = AsyncConnectionPool(
                conninfo,
                min_size=min_size,
                max_size=max_size,
                open=False,
            )
        self._pool = pool

    @property
    def pool(self) -> AsyncConnectionPool:
        return self._pool

    async def open(self) -> None:
        """Open the pool and wait until ``min_size`` connections are ready."""
        await self._pool.open(wait=True)
        logger.info(
            "executor_pool_opened",
            min_size=self._pool.min_size,
            max_size=self._pool.max_size,
        )

    async def close(self) -> None:
        await self._pool.close()
        logger.info("executor_pool_closed")

    async def __aenter__(self) -> PsycopgQueryExecutor:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # IQueryExecutor implementation
    # ------------------------------------------------------------------

    async def execute(self, statement: SQLStatement) -> list[Row]:
        async with self._pool.connection() as conn:
            return await _execute_on(conn, statement)

    async def stream(self, statement: SQLStatement) -> AsyncIterator[Row]:
        # The connection stays checked out until the generator finishes or
        # is closed; closing it unwinds both context managers.
        async with self._pool.connection() as conn, aclosing(_stream_on(conn, statement)) as rows:
            async for row in rows:
                yield row

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[IQueryExecutor]:
        async with self._pool.connection() as conn:
            async with conn.transaction():
                yield _ConnectionExecutor(conn)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
