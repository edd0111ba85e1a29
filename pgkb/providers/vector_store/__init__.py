"""Vector store provider implementations.

PostgresVectorStore keeps documents and embeddings in two PostgreSQL tables
and ranks embeddings with pgvector's distance operators.  Another backend can
be added by implementing IVectorStoreProvider.
"""

from pgkb.providers.vector_store.postgres_vector_store import PostgresVectorStore

__all__ = ["PostgresVectorStore"]
