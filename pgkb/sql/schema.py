"""Example schema DDL for a document/embedding table pair.

Rendering only: pgkb never creates or migrates tables itself.  The output is
meant to be reviewed and applied by whatever migration tool the application
uses (or piped into ``psql`` for local experiments).
"""

from __future__ import annotations

from collections.abc import Sequence

from pgkb.models.distance import DistanceAlgorithm, operator_class, resolve_algorithm
from pgkb.sql.identifiers import quote_identifier


def render_schema(
    dimension: int,
    algorithm: DistanceAlgorithm | str = DistanceAlgorithm.COSINE,
    document_table: str = "documents",
    embedding_table: str = "embeddings",
    scope_columns: Sequence[str] = ("scope",),
    *,
    vector_column: str = "vector",
    text_column: str = "text",
    document_column: str = "document",
) -> str:
    """Return ``CREATE`` statements for both tables and the HNSW index.

    The index uses the operator class matching *algorithm*; a store queried
    with a different algorithm still works but cannot use the index.  The
    embedding columns take the physical names a store maps them to.
    """
    if dimension <= 0:
        msg = f"Vector dimension must be positive, got {dimension}"
        raise ValueError(msg)
    algorithm = resolve_algorithm(algorithm)

    documents = quote_identifier(document_table)
    embeddings = quote_identifier(embedding_table)
    vector = quote_identifier(vector_column)
    scope_ddl = "".join(
        f"    {quote_identifier(column)} TEXT NOT NULL,\n" for column in scope_columns
    )
    index_name = quote_identifier(f"idx_{embedding_table}_{vector_column}_{algorithm.value}")

    return (
        'CREATE EXTENSION IF NOT EXISTS "vector";\n'
        "\n"
        f"CREATE TABLE IF NOT EXISTS {documents} (\n"
        '    "id" SERIAL PRIMARY KEY,\n'
        '    "name" TEXT NOT NULL,\n'
        f"{scope_ddl}"
        '    "created_at" TIMESTAMPTZ DEFAULT NOW()\n'
        ");\n"
        "\n"
        f"CREATE TABLE IF NOT EXISTS {embeddings} (\n"
        '    "id" SERIAL PRIMARY KEY,\n'
        f"    {quote_identifier(document_column)} INTEGER NOT NULL "
        f'REFERENCES {documents} ("id") ON DELETE CASCADE,\n'
        f"    {quote_identifier(text_column)} TEXT NOT NULL,\n"
        f"{scope_ddl}"
        f"    {vector} vector({dimension}),\n"
        '    "created_at" TIMESTAMPTZ DEFAULT NOW()\n'
        ");\n"
        "\n"
        f"CREATE INDEX IF NOT EXISTS {index_name} ON {embeddings} "
        f'USING "hnsw" ({vector} {operator_class(algorithm)});\n'
    )
