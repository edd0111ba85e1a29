"""Shared pytest fixtures for the pgkb test suite."""

from __future__ import annotations

from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import pytest

from pgkb.interfaces.query_executor import IQueryExecutor, Row
from pgkb.sql.statement import SQLStatement


class RecordingExecutor(IQueryExecutor):
    """In-memory executor that records statements and replays canned rows.

    ``execute`` pops the next queued result (``[]`` when the queue is empty);
    ``stream`` yields ``stream_rows``.  Set ``fail_at`` to the zero-based
    index of the ``execute`` call that should raise ``error``.
    """

    def __init__(self) -> None:
        self.statements: list[SQLStatement] = []
        self.results: deque[list[Row]] = deque()
        self.stream_rows: list[Row] = []
        self.fail_at: int | None = None
        self.error: Exception = RuntimeError("connection lost")
        self.executed = 0
        self.streams_opened = 0
        self.streams_closed = 0
        self.rows_streamed = 0
        self.transactions: list[str] = []

    def queue(self, *results: list[Row]) -> None:
        self.results.extend(results)

    async def execute(self, statement: SQLStatement) -> list[Row]:
        index = self.executed
        self.executed += 1
        if self.fail_at is not None and index == self.fail_at:
            raise self.error
        self.statements.append(statement)
        return self.results.popleft() if self.results else []

    async def stream(self, statement: SQLStatement) -> AsyncIterator[Row]:
        self.statements.append(statement)
        self.streams_opened += 1
        try:
            for row in self.stream_rows:
                self.rows_streamed += 1
                yield row
        finally:
            self.streams_closed += 1

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[IQueryExecutor]:
        self.transactions.append("begin")
        try:
            yield self
        except BaseException:
            self.transactions.append("rollback")
            raise
        self.transactions.append("commit")

    def get_provider_name(self) -> str:
        return "recording"


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def embedding_rows() -> list[dict[str, Any]]:
    """Rows as the distance query returns them, closest first."""
    return [
        {"document": 1, "text": "Hello", "vector": "[1,2,3]", "distance": 0.0},
        {"document": 1, "text": "World", "vector": "[4,5,6]", "distance": 0.025368},
        {"document": 1, "text": "Foo", "vector": "[7,8,9]", "distance": 0.040588},
    ]
