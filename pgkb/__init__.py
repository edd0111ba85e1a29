"""pgkb - document and embedding storage on PostgreSQL with pgvector.

Typical use::

    async with PsycopgQueryExecutor(conninfo=url) as executor:
        store = PostgresVectorStore(executor, document_scope={"tenant": "acme"})
        key = await store.create_document({"name": "Example Doc"})
        await store.append(key, [Embedding(text="Hello", vector=[1, 2, 3])])
        async for hit in store.query([1, 2, 3], [key]):
            print(hit.text, hit.distance)
"""

from pgkb.models.distance import DistanceAlgorithm
from pgkb.models.embedding import Embedding, EmbeddingColumn, EmbeddingResult, EmbeddingRow
from pgkb.providers.executor.psycopg_executor import PsycopgQueryExecutor
from pgkb.providers.vector_store.postgres_vector_store import PostgresVectorStore
from pgkb.sql.identifiers import quote_identifier
from pgkb.utils.errors import ConfigurationError, ContractViolationError, PgKBError

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ContractViolationError",
    "DistanceAlgorithm",
    "Embedding",
    "EmbeddingColumn",
    "EmbeddingResult",
    "EmbeddingRow",
    "PgKBError",
    "PostgresVectorStore",
    "PsycopgQueryExecutor",
    "quote_identifier",
]
