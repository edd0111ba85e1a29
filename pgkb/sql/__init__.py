"""SQL construction: identifier quoting, statements, builders and example DDL."""

from pgkb.sql.builders import (
    PRIMARY_KEY_COLUMN,
    create_delete_query,
    create_distance_query,
    create_insert_query,
    create_scope_filter,
    create_select_all_query,
    create_select_by_key_query,
)
from pgkb.sql.identifiers import quote_identifier
from pgkb.sql.schema import render_schema
from pgkb.sql.statement import SQLStatement

__all__ = [
    "PRIMARY_KEY_COLUMN",
    "SQLStatement",
    "create_delete_query",
    "create_distance_query",
    "create_insert_query",
    "create_scope_filter",
    "create_select_all_query",
    "create_select_by_key_query",
    "quote_identifier",
    "render_schema",
]
