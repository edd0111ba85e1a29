"""Abstract base class for vector-store providers.

Defines the contract for storing documents, appending their embeddings and
querying nearest neighbours.  The adapter keeps retrieval code independent of
the storage backend; PostgreSQL with pgvector is the bundled implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from pgkb.models.embedding import Embedding, EmbeddingResult

TKey = TypeVar("TKey")
TDocument = TypeVar("TDocument")

EmbeddingInput = Embedding | Mapping[str, Any]


# Concrete implementation: PostgresVectorStore (pgkb/providers/vector_store/)
class IVectorStoreProvider(ABC, Generic[TKey, TDocument]):
    """Contract for document + embedding stores.

    Single-result operations are coroutines.  Operations that can return
    many rows (:meth:`get_documents`, :meth:`query`) return async iterators
    so callers can stream large result sets.
    """

    @abstractmethod
    async def create_document(self, document: Mapping[str, Any] | BaseModel) -> TKey:
        """Persist a new document and return its generated primary key.

        Parameters
        ----------
        document:
            Document fields without ``id``; the store generates the key.

        Raises
        ------
        ValueError
            If *document* carries an ``id``.
        pgkb.utils.errors.ContractViolationError
            If the insert did not return exactly one key.
        """

    @abstractmethod
    async def get_document_by_reference(self, reference: TKey) -> TDocument | None:
        """Return the document with key *reference*, or ``None`` if absent.

        A document outside the store's scope counts as absent.
        """

    @abstractmethod
    def get_documents(self) -> AsyncIterator[TDocument]:
        """Stream every document visible in the store's scope."""

    @abstractmethod
    async def append(
        self,
        document: TKey,
        embeddings: Iterable[EmbeddingInput] | AsyncIterable[EmbeddingInput],
        *,
        atomic: bool = False,
    ) -> int:
        """Attach *embeddings* to *document*, one insert per item, in order.

        Parameters
        ----------
        document:
            Key of the owning document.
        embeddings:
            Sync or async iterable, consumed lazily.
        atomic:
            When ``False`` (default) each insert stands alone and a failure
            leaves the already-inserted prefix in place.  When ``True`` all
            inserts run in one transaction and a failure rolls them back.

        Returns
        -------
        int
            Number of embeddings inserted.
        """

    @abstractmethod
    async def delete(self, document: TKey) -> None:
        """Delete *document*; its embeddings go with it (cascading FK)."""

    @abstractmethod
    def query(
        self,
        vector: Iterable[float],
        documents: Iterable[TKey] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> AsyncIterator[EmbeddingResult]:
        """Stream the embeddings nearest to *vector*, closest first.

        Parameters
        ----------
        vector:
            Query vector; must have the column's dimension.
        documents:
            Optional allow-list of document keys.
        limit, offset:
            Pagination over the distance ordering.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"postgres"``."""
