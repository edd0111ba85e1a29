"""Statement builders for the document and embedding tables.

Every builder is a pure function of its arguments and returns a
:class:`~pgkb.sql.statement.SQLStatement`.  Table and column names always go
through :func:`~pgkb.sql.identifiers.quote_identifier`; values always go
through :meth:`SQLStatement.bind`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pgkb.models.distance import DistanceAlgorithm, distance_operator
from pgkb.models.scope import Scope
from pgkb.sql.identifiers import quote_identifier
from pgkb.sql.statement import SQLStatement
from pgkb.utils.vector_codec import is_vector_value, to_vector_literal

PRIMARY_KEY_COLUMN = "id"

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


def create_scope_filter(scope: Scope) -> SQLStatement:
    """Render *scope* as ``"a" = %s AND "b" = %s``; empty scope -> empty statement.

    A ``None`` value renders as ``IS NOT DISTINCT FROM %s`` so rows written
    with a NULL scope column are matched by their own store.
    """
    filters = [
        SQLStatement(quote_identifier(column))
        .append(" IS NOT DISTINCT FROM " if value is None else " = ")
        .bind(value)
        for column, value in scope.items()
    ]
    return SQLStatement.join(filters, " AND ")


def _with_filters(statement: SQLStatement, filters: Sequence[SQLStatement]) -> SQLStatement:
    """Append ``WHERE f1 AND f2 ...`` for the non-empty *filters*, if any."""
    combined = SQLStatement.join(filters, " AND ")
    if not combined.is_empty():
        statement.append(" WHERE ").append(combined)
    return statement


def _primary_key_filter(key: Any) -> SQLStatement:
    return SQLStatement(quote_identifier(PRIMARY_KEY_COLUMN) + " = ").bind(key)


def create_insert_query(
    table: str,
    record: Mapping[str, Any],
    scope: Scope,
    map_column: Callable[[str], str] | None = None,
) -> SQLStatement:
    """Build ``INSERT INTO "table" (...) VALUES (...) RETURNING "id"``.

    Scope columns come first; record fields override a scope column of the
    same name.  *map_column* renames record fields only, scope keys are
    already physical column names.  List and tuple values are bound as
    pgvector literals.
    """
    columns: dict[str, Any] = dict(scope)
    for field, value in record.items():
        column = map_column(field) if map_column is not None else field
        columns[column] = value

    if not columns:
        msg = f"Nothing to insert into {table!r}: record and scope are both empty"
        raise ValueError(msg)

    statement = SQLStatement("INSERT INTO ").append(quote_identifier(table)).append(" (")
    statement.append(", ".join(quote_identifier(column) for column in columns))
    statement.append(") VALUES (")
    for index, value in enumerate(columns.values()):
        if index > 0:
            statement.append(", ")
        statement.bind(to_vector_literal(value) if is_vector_value(value) else value)
    statement.append(") RETURNING ").append(quote_identifier(PRIMARY_KEY_COLUMN))
    return statement


def create_select_by_key_query(table: str, key: Any, scope: Scope) -> SQLStatement:
    """Build ``SELECT * FROM "table" WHERE "id" = %s [AND scope]``."""
    statement = SQLStatement("SELECT * FROM ").append(quote_identifier(table))
    return _with_filters(statement, [_primary_key_filter(key), create_scope_filter(scope)])


def create_select_all_query(table: str, scope: Scope) -> SQLStatement:
    """Build ``SELECT * FROM "table" [WHERE scope]``."""
    statement = SQLStatement("SELECT * FROM ").append(quote_identifier(table))
    return _with_filters(statement, [create_scope_filter(scope)])


def create_delete_query(table: str, key: Any, scope: Scope) -> SQLStatement:
    """Build ``DELETE FROM "table" WHERE "id" = %s [AND scope]``."""
    statement = SQLStatement("DELETE FROM ").append(quote_identifier(table))
    return _with_filters(statement, [_primary_key_filter(key), create_scope_filter(scope)])


def create_distance_query(
    vector: Sequence[float],
    algorithm: DistanceAlgorithm | str,
    *,
    table: str,
    scope: Scope,
    documents: Sequence[Any] | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = DEFAULT_OFFSET,
    vector_column: str = "vector",
    text_column: str = "text",
    document_column: str = "document",
) -> SQLStatement:
    """Build the nearest-neighbour SELECT for *vector*.

    Selects ``document``, ``text``, ``vector`` and ``distance`` (the
    algorithm's operator applied to the vector column and the bound query
    vector), filtered by *scope* and, when *documents* is given, by
    ``document = ANY(%s)``.  Ordered by ascending distance.

    Raises
    ------
    ConfigurationError
        If *algorithm* is not a supported distance algorithm.
    ValueError
        If *vector* is empty or *limit* / *offset* is negative.
    """
    operator = distance_operator(algorithm)

    if len(vector) == 0:
        msg = "Query vector must not be empty"
        raise ValueError(msg)
    if limit < 0 or offset < 0:
        msg = f"limit and offset must be non-negative, got limit={limit} offset={offset}"
        raise ValueError(msg)

    vector_id = quote_identifier(vector_column)
    document_id = quote_identifier(document_column)

    statement = SQLStatement("SELECT ")
    statement.append(document_id).append(" AS document, ")
    statement.append(quote_identifier(text_column)).append(" AS text, ")
    statement.append(vector_id).append(" AS vector, ")
    statement.append(f"{vector_id} {operator} ").bind(to_vector_literal(vector))
    statement.append(" AS distance FROM ").append(quote_identifier(table))

    filters = [create_scope_filter(scope)]
    if documents is not None:
        filters.append(SQLStatement(f"{document_id} = ANY(").bind(list(documents)).append(")"))
    _with_filters(statement, filters)

    statement.append(" ORDER BY distance ASC LIMIT ").bind(limit)
    statement.append(" OFFSET ").bind(offset)
    return statement
