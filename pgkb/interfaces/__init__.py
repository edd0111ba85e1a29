"""Public interface definitions for the external services pgkb depends on.

Concrete adapters implement these abstract base classes and are injected at
construction time:

    Interface                  →  Concrete implementations
    ─────────────────────────────────────────────────────────
    IQueryExecutor             →  PsycopgQueryExecutor
    IVectorStoreProvider       →  PostgresVectorStore

Unit tests inject in-memory fakes of ``IQueryExecutor`` instead of a
database connection pool.
"""

from pgkb.interfaces.query_executor import IQueryExecutor, Row
from pgkb.interfaces.vector_store_provider import EmbeddingInput, IVectorStoreProvider

__all__ = [
    "EmbeddingInput",
    "IQueryExecutor",
    "IVectorStoreProvider",
    "Row",
]
