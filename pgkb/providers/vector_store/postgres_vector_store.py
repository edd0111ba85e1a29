"""PostgreSQL + pgvector vector store provider.

Implements :class:`IVectorStoreProvider` on top of two tables: a document
table with a generated ``id`` and an embedding table whose rows reference a
document.  Statements come from :mod:`pgkb.sql.builders` and run through an
injected :class:`IQueryExecutor`; the store itself only holds configuration
fixed at construction time.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Mapping
from contextlib import aclosing, asynccontextmanager
from typing import Any

import structlog
from pydantic import BaseModel

from pgkb.interfaces.query_executor import IQueryExecutor, Row
from pgkb.interfaces.vector_store_provider import (
    EmbeddingInput,
    IVectorStoreProvider,
    TDocument,
    TKey,
)
from pgkb.models.distance import DistanceAlgorithm, resolve_algorithm
from pgkb.models.embedding import Embedding, EmbeddingColumn, EmbeddingResult
from pgkb.models.scope import Scope, freeze_scope
from pgkb.sql.builders import (
    PRIMARY_KEY_COLUMN,
    create_delete_query,
    create_distance_query,
    create_insert_query,
    create_select_all_query,
    create_select_by_key_query,
)
from pgkb.sql.statement import SQLStatement
from pgkb.utils.errors import ConfigurationError, ContractViolationError
from pgkb.utils.streams import iterate
from pgkb.utils.vector_codec import parse_vector

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "postgres"

ColumnMapper = Callable[[EmbeddingColumn], str]


def _identity_column(column: EmbeddingColumn) -> str:
    return column.value


class PostgresVectorStore(IVectorStoreProvider[TKey, TDocument]):
    """Vector store backed by PostgreSQL with the pgvector extension.

    Parameters
    ----------
    executor:
        Runs statements; owns the connection pool.
    algorithm:
        Distance function used by :meth:`query` (default cosine).
    document_scope, embedding_scope:
        Equality constraints merged into every write and read filter of the
        respective table, e.g. ``{"tenant": "acme"}``.
    document_table, embedding_table:
        Table names.
    map_embedding_column:
        Maps the logical embedding columns (``vector``, ``text``,
        ``document``) to physical column names.  Identity by default.
    document_model:
        Optional pydantic model that document rows are validated into.
        Without it documents are returned as plain dicts.

    Raises
    ------
    ConfigurationError
        For an unknown algorithm, a non-scalar scope value, or a column
        mapper returning something other than a non-empty string.
    """

    def __init__(
        self,
        executor: IQueryExecutor,
        *,
        algorithm: DistanceAlgorithm | str = DistanceAlgorithm.COSINE,
        document_scope: Mapping[str, Any] | None = None,
        embedding_scope: Mapping[str, Any] | None = None,
        document_table: str = "documents",
        embedding_table: str = "embeddings",
        map_embedding_column: ColumnMapper | None = None,
        document_model: type[BaseModel] | None = None,
    ) -> None:
        self._executor = executor
        self._algorithm = resolve_algorithm(algorithm)
        self._document_scope = freeze_scope(document_scope, "document_scope")
        self._embedding_scope = freeze_scope(embedding_scope, "embedding_scope")
        self._document_table = document_table
        self._embedding_table = embedding_table
        self._document_model = document_model

        mapper = map_embedding_column or _identity_column
        self._embedding_columns: dict[EmbeddingColumn, str] = {}
        for column in EmbeddingColumn:
            physical = mapper(column)
            if not isinstance(physical, str) or not physical:
                raise ConfigurationError(
                    message=f"map_embedding_column({column.value!r}) returned {physical!r}",
                    provider_name=_PROVIDER_NAME,
                )
            self._embedding_columns[column] = physical

    # ------------------------------------------------------------------
    # Read-only configuration
    # ------------------------------------------------------------------

    @property
    def algorithm(self) -> DistanceAlgorithm:
        return self._algorithm

    @property
    def document_scope(self) -> Scope:
        return self._document_scope

    @property
    def embedding_scope(self) -> Scope:
        return self._embedding_scope

    def embedding_column(self, column: EmbeddingColumn | str) -> str:
        """Return the physical column name for a logical embedding column."""
        return self._embedding_columns[EmbeddingColumn(column)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _operation(self, name: str, **context: Any) -> AsyncIterator[None]:
        """Tag executor failures with the logical operation, then re-raise as-is."""
        try:
            yield
        except Exception as exc:
            exc.add_note(f"pgkb operation: {name}")
            logger.error(
                "vector_store_operation_failed",
                operation=name,
                error=str(exc),
                error_type=type(exc).__name__,
                **context,
            )
            raise

    async def _stream(self, name: str, statement: SQLStatement) -> AsyncIterator[Row]:
        async with self._operation(name), aclosing(self._executor.stream(statement)) as rows:
            async for row in rows:
                yield row

    def _to_document(self, row: Row) -> Any:
        if self._document_model is not None:
            return self._document_model.model_validate(row)
        return dict(row)

    @staticmethod
    def _document_fields(document: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
        if isinstance(document, BaseModel):
            fields = document.model_dump(exclude_unset=True)
        else:
            fields = dict(document)
        if fields.get(PRIMARY_KEY_COLUMN) is not None:
            msg = f"Document {PRIMARY_KEY_COLUMN!r} is generated by the store and must not be supplied"
            raise ValueError(msg)
        fields.pop(PRIMARY_KEY_COLUMN, None)
        return fields

    def _map_embedding_field(self, field: str) -> str:
        return self._embedding_columns[EmbeddingColumn(field)]

    @staticmethod
    def _to_result(row: Row) -> EmbeddingResult:
        # A NULL vector yields a NULL distance; such rows sort last and pass through.
        vector = row["vector"]
        distance = row["distance"]
        return EmbeddingResult(
            text=row["text"],
            vector=None if vector is None else parse_vector(vector),
            distance=None if distance is None else float(distance),
            document=row["document"],
        )

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def create_document(self, document: Mapping[str, Any] | BaseModel) -> TKey:
        statement = create_insert_query(
            self._document_table,
            self._document_fields(document),
            self._document_scope,
        )
        async with self._operation("create_document", table=self._document_table):
            rows = await self._executor.execute(statement)

        if len(rows) != 1:
            raise ContractViolationError(
                message=f"Expected one row to be returned by insert, got {len(rows)}",
                provider_name=_PROVIDER_NAME,
            )
        key = rows[0][PRIMARY_KEY_COLUMN]
        logger.info("document_created", table=self._document_table, document=key)
        return key

    async def get_document_by_reference(self, reference: TKey) -> TDocument | None:
        statement = create_select_by_key_query(
            self._document_table, reference, self._document_scope
        )
        async with self._operation("get_document_by_reference", document=reference):
            rows = await self._executor.execute(statement)
        if not rows:
            return None
        return self._to_document(rows[0])

    async def get_documents(self) -> AsyncIterator[TDocument]:
        statement = create_select_all_query(self._document_table, self._document_scope)
        async with aclosing(self._stream("get_documents", statement)) as rows:
            async for row in rows:
                yield self._to_document(row)

    async def append(
        self,
        document: TKey,
        embeddings: Iterable[EmbeddingInput] | AsyncIterable[EmbeddingInput],
        *,
        atomic: bool = False,
    ) -> int:
        if atomic:
            async with self._operation("append", document=document, atomic=True):
                async with self._executor.transaction() as tx:
                    count = await self._insert_embeddings(tx, document, embeddings)
        else:
            async with self._operation("append", document=document, atomic=False):
                count = await self._insert_embeddings(self._executor, document, embeddings)

        logger.info(
            "embeddings_appended",
            table=self._embedding_table,
            document=document,
            count=count,
            atomic=atomic,
        )
        return count

    async def _insert_embeddings(
        self,
        executor: IQueryExecutor,
        document: TKey,
        embeddings: Iterable[EmbeddingInput] | AsyncIterable[EmbeddingInput],
    ) -> int:
        count = 0
        async for item in iterate(embeddings):
            embedding = item if isinstance(item, Embedding) else Embedding.model_validate(item)
            statement = create_insert_query(
                self._embedding_table,
                {
                    EmbeddingColumn.TEXT.value: embedding.text,
                    EmbeddingColumn.VECTOR.value: embedding.vector,
                    EmbeddingColumn.DOCUMENT.value: document,
                },
                self._embedding_scope,
                self._map_embedding_field,
            )
            await executor.execute(statement)
            count += 1
        return count

    async def delete(self, document: TKey) -> None:
        statement = create_delete_query(self._document_table, document, self._document_scope)
        async with self._operation("delete", document=document):
            await self._executor.execute(statement)
        logger.info("document_deleted", table=self._document_table, document=document)

    def query(
        self,
        vector: Iterable[float],
        documents: Iterable[TKey] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> AsyncIterator[EmbeddingResult]:
        """Stream the nearest embeddings to *vector*.

        *vector* and *documents* may be any iterables (numpy arrays,
        generators); each is read exactly once.  The statement is built
        immediately, so invalid arguments raise here; the database is only
        contacted once the iterator is consumed.
        """
        vector = list(vector)
        if documents is not None:
            documents = list(documents)
        statement = create_distance_query(
            vector,
            self._algorithm,
            table=self._embedding_table,
            scope=self._embedding_scope,
            documents=documents,
            limit=limit,
            offset=offset,
            vector_column=self._embedding_columns[EmbeddingColumn.VECTOR],
            text_column=self._embedding_columns[EmbeddingColumn.TEXT],
            document_column=self._embedding_columns[EmbeddingColumn.DOCUMENT],
        )
        logger.debug(
            "vector_query_built",
            algorithm=self._algorithm.value,
            dimension=len(vector),
            documents=None if documents is None else len(documents),
            limit=limit,
            offset=offset,
        )
        return self._query_results(statement)

    async def _query_results(self, statement: SQLStatement) -> AsyncIterator[EmbeddingResult]:
        async with aclosing(self._stream("query", statement)) as rows:
            async for row in rows:
                yield self._to_result(row)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
