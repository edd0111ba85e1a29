# =============================================================================
# pgkb/cli/store.py - CLI for a PostgreSQL vector store
# =============================================================================
#
# Subcommands:
#
#   schema - print example DDL (document table, embedding table, HNSW index)
#   demo   - walk through create / append / query / delete on a live database
#   query  - run a nearest-neighbour query and print JSON lines
#
# Configuration comes from config/config.yaml (or --config) with PGKB_*
# environment variables layered on top; see pgkb/config/loader.py.
#
# Usage examples:
#   python -m pgkb.cli schema --dimension 1536 --algorithm l2
#   python -m pgkb.cli demo --scope test
#   python -m pgkb.cli query --vector 2.5,3,4.5 --document 1 --limit 5
# =============================================================================

"""Command-line tools for a pgkb vector store."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from typing import Any

import psycopg
import structlog

from pgkb.config.loader import load_config
from pgkb.interfaces.vector_store_provider import IVectorStoreProvider
from pgkb.models.distance import DistanceAlgorithm
from pgkb.models.embedding import Embedding
from pgkb.sql.schema import render_schema
from pgkb.utils.errors import PgKBError
from pgkb.utils.logging import configure_logging
from pgkb.utils.streams import collect

_logger: structlog.BoundLogger = structlog.get_logger(logger_name=__name__)

DEMO_EMBEDDINGS = [
    Embedding(text="Hello", vector=[1, 2, 3]),
    Embedding(text="World", vector=[4, 5, 6]),
    Embedding(text="Foo", vector=[7, 8, 9]),
]
DEMO_QUERY = [2.5, 3, 4.5]


def _parse_vector(raw: str) -> list[float]:
    try:
        vector = [float(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        msg = f"Invalid vector {raw!r}: expected comma-separated numbers"
        raise argparse.ArgumentTypeError(msg) from None
    if not vector:
        msg = "Vector must contain at least one number"
        raise argparse.ArgumentTypeError(msg)
    return vector


def _parse_key(raw: str) -> int | str:
    # SERIAL keys are the common case; anything else is passed through as text.
    return int(raw) if raw.lstrip("-").isdigit() else raw


def _scope_overrides(args: argparse.Namespace) -> dict[str, Any]:
    if args.scope is None:
        return {}
    scope = {"scope": args.scope}
    return {"document_scope": scope, "embedding_scope": scope}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_schema(args: argparse.Namespace, config: dict[str, Any]) -> int:
    store = config.get("store") or {}
    columns = store.get("embedding_columns") or {}
    print(
        render_schema(
            dimension=args.dimension or int(store.get("vector_dimension", 3)),
            algorithm=args.algorithm or store.get("algorithm", "cosine"),
            document_table=store.get("document_table", "documents"),
            embedding_table=store.get("embedding_table", "embeddings"),
            scope_columns=args.scope_column or ["scope"],
            vector_column=columns.get("vector", "vector"),
            text_column=columns.get("text", "text"),
            document_column=columns.get("document", "document"),
        ),
        end="",
    )
    return 0


async def run_demo(store: IVectorStoreProvider) -> None:
    """List documents, then create, fill, query and delete a test document."""
    documents = await collect(store.get_documents())
    print(f"Documents in store: {documents}")

    reference = await store.create_document({"name": "Test Document"})
    print(f"Created document with ID: {reference}")

    count = await store.append(reference, DEMO_EMBEDDINGS)
    print(f"Appended {count} embeddings to document.")

    results = await collect(store.query(DEMO_QUERY, [reference]))
    print("Query result:")
    for result in results:
        print(f"  {result.model_dump_json()}")

    await store.delete(reference)
    print(f"Deleted document with ID: {reference}")


async def run_query(
    store: IVectorStoreProvider,
    vector: Sequence[float],
    documents: Sequence[Any] | None,
    limit: int,
    offset: int,
) -> int:
    """Print one JSON object per result; return the number printed."""
    printed = 0
    async for result in store.query(vector, documents, limit=limit, offset=offset):
        print(result.model_dump_json())
        printed += 1
    return printed


async def _with_store(args: argparse.Namespace, config: dict[str, Any]) -> int:
    # Deferred so `schema` does not import the pool machinery.
    from pgkb.main import build_executor, build_vector_store

    async with build_executor(config) as executor:
        store = build_vector_store(config, executor, **_scope_overrides(args))
        if args.command == "demo":
            await run_demo(store)
        else:
            count = await run_query(
                store,
                args.vector,
                args.document or None,
                limit=args.limit,
                offset=args.offset,
            )
            _logger.info("query_completed", results=count)
    return 0


# ---------------------------------------------------------------------------
# Parser / entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgkb",
        description="PostgreSQL/pgvector document and embedding store tools.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML configuration file (default: config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    schema = subparsers.add_parser("schema", help="Print example schema DDL")
    schema.add_argument("--dimension", type=int, help="Vector dimension")
    schema.add_argument(
        "--algorithm",
        choices=[a.value for a in DistanceAlgorithm],
        help="Distance algorithm the HNSW index is built for",
    )
    schema.add_argument(
        "--scope-column",
        action="append",
        help="Scope column to add to both tables (repeatable, default: scope)",
    )

    demo = subparsers.add_parser("demo", help="Run the create/append/query/delete demo")
    demo.add_argument("--scope", help="Value for the 'scope' column of both tables")

    query = subparsers.add_parser("query", help="Nearest-neighbour query")
    query.add_argument("--vector", required=True, type=_parse_vector, help="e.g. 1,2,3")
    query.add_argument(
        "--document",
        action="append",
        type=_parse_key,
        help="Restrict to this document key (repeatable)",
    )
    query.add_argument("--limit", type=int, default=10)
    query.add_argument("--offset", type=int, default=0)
    query.add_argument("--scope", help="Value for the 'scope' column of both tables")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point; exits 0 on success and 1 on failure."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    configure_logging(config.get("logging", {}).get("level", "INFO"))

    try:
        if args.command == "schema":
            exit_code = _handle_schema(args, config)
        else:
            exit_code = asyncio.run(_with_store(args, config))
    except (PgKBError, psycopg.Error, ValueError) as exc:
        _logger.error("command_failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
