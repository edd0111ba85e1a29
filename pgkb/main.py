"""Factories wiring configuration into executors and vector stores.

``load_config()`` produces the configuration dictionary; the builders here
turn it into a :class:`PsycopgQueryExecutor` and a
:class:`PostgresVectorStore`.  The executor's pool is created closed; open it
with ``await executor.open()`` or ``async with executor:``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from pgkb.interfaces.query_executor import IQueryExecutor
from pgkb.models.embedding import EmbeddingColumn
from pgkb.providers.executor.psycopg_executor import PsycopgQueryExecutor
from pgkb.providers.vector_store.postgres_vector_store import ColumnMapper, PostgresVectorStore
from pgkb.utils.errors import ConfigurationError

_logger: structlog.BoundLogger = structlog.get_logger(logger_name=__name__)


def build_executor(config: Mapping[str, Any]) -> PsycopgQueryExecutor:
    """Create a psycopg executor from the ``database`` section of *config*."""
    database = config.get("database") or {}
    url = database.get("url") or ""
    if not url:
        raise ConfigurationError(
            message="No database URL configured (set PGKB_DATABASE_URL or database.url)",
            provider_name="psycopg",
        )
    return PsycopgQueryExecutor(
        conninfo=url,
        min_size=int(database.get("pool_min_size", 1)),
        max_size=int(database.get("pool_max_size", 10)),
    )


def _column_mapper(columns: Mapping[str, str]) -> ColumnMapper | None:
    if not columns:
        return None
    unknown = set(columns) - {column.value for column in EmbeddingColumn}
    if unknown:
        raise ConfigurationError(
            message=f"Unknown embedding columns in store.embedding_columns: {sorted(unknown)}",
            provider_name="postgres",
        )
    mapping = dict(columns)
    return lambda column: mapping.get(column.value, column.value)


def build_vector_store(
    config: Mapping[str, Any],
    executor: IQueryExecutor,
    **overrides: Any,
) -> PostgresVectorStore:
    """Create a vector store from the ``store`` section of *config*.

    Keyword *overrides* take precedence over the configuration, e.g.
    ``document_scope={"scope": "B"}`` from a command-line flag.
    """
    store = config.get("store") or {}
    options: dict[str, Any] = {
        "algorithm": store.get("algorithm", "cosine"),
        "document_scope": store.get("document_scope") or {},
        "embedding_scope": store.get("embedding_scope") or {},
        "document_table": store.get("document_table", "documents"),
        "embedding_table": store.get("embedding_table", "embeddings"),
        "map_embedding_column": _column_mapper(store.get("embedding_columns") or {}),
    }
    options.update(overrides)

    vector_store = PostgresVectorStore(executor, **options)
    _logger.info(
        "vector_store_built",
        algorithm=vector_store.algorithm.value,
        document_table=options["document_table"],
        embedding_table=options["embedding_table"],
        document_scope=dict(vector_store.document_scope),
        embedding_scope=dict(vector_store.embedding_scope),
    )
    return vector_store
