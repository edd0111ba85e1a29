"""Abstract base class for SQL query executors.

The vector store never talks to a driver directly.  It hands
:class:`~pgkb.sql.statement.SQLStatement` objects to an executor, which owns
connections (usually a pool) and returns rows as dictionaries.  This keeps
the statement-building core independent of the driver and lets unit tests
inject an in-memory executor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from typing import Any

from pgkb.sql.statement import SQLStatement

Row = dict[str, Any]


# Concrete implementation: PsycopgQueryExecutor (pgkb/providers/executor/)
class IQueryExecutor(ABC):
    """Contract for running parameterized statements.

    Implementations must be safe to share between concurrent tasks: each
    call borrows its own connection and gives it back when done.
    """

    @abstractmethod
    async def execute(self, statement: SQLStatement) -> list[Row]:
        """Run *statement* and return every row it produced.

        Parameters
        ----------
        statement:
            The statement text and its bound values.

        Returns
        -------
        list[dict[str, Any]]
            Rows keyed by column name; empty for statements without a result
            set (e.g. ``DELETE`` without ``RETURNING``).

        Raises
        ------
        Exception
            Driver errors propagate unchanged.
        """

    @abstractmethod
    def stream(self, statement: SQLStatement) -> AsyncIterator[Row]:
        """Run *statement* and yield its rows one at a time.

        The connection is held for as long as the iterator is alive and is
        released when iteration finishes, raises, or the iterator is closed
        with ``aclose()``.
        """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[IQueryExecutor]:
        """Return a context manager yielding an executor bound to one transaction.

        Statements run through the yielded executor share a single
        connection.  The transaction commits when the block exits normally
        and rolls back when it raises.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this executor, e.g. ``"psycopg"``."""
