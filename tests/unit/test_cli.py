"""Unit tests for the pgkb command-line tool (pgkb.cli.store)."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from pgkb.cli import store as cli
from pgkb.providers.vector_store.postgres_vector_store import PostgresVectorStore


# ======================================================================
# Shared helpers
# ======================================================================


@pytest.fixture(autouse=True)
def _quiet_cli(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep main() from reconfiguring logging or reading PGKB_* variables."""
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    for name in list(os.environ):
        if name.startswith("PGKB_"):
            monkeypatch.delenv(name)
    # structlog's default logger prints to stdout; keep stdout for CLI output.
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    yield
    structlog.reset_defaults()


def _config_file(tmp_path: Path, url: str = "postgresql://h/db") -> str:
    path = tmp_path / "config.yaml"
    path.write_text(
        f"database:\n  url: '{url}'\n"
        "store:\n"
        "  vector_dimension: 4\n"
        "  document_scope:\n    scope: test\n"
        "  embedding_scope:\n    scope: test\n"
    )
    return str(path)


class _ExecutorContext:
    """Async context manager handing out a prepared executor."""

    def __init__(self, executor) -> None:
        self.executor = executor

    async def __aenter__(self):
        return self.executor

    async def __aexit__(self, *exc_info: object) -> None:
        return None


def _run_main(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


# ======================================================================
# Argument parsing
# ======================================================================


class TestParsing:
    def test_parse_vector(self) -> None:
        assert cli._parse_vector("1, 2.5,-3") == [1.0, 2.5, -3.0]

    @pytest.mark.parametrize("raw", ["", ",", "1,two"])
    def test_parse_vector_rejects_bad_input(self, raw: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            cli._parse_vector(raw)

    @pytest.mark.parametrize(("raw", "expected"), [("12", 12), ("-3", -3), ("doc-a", "doc-a")])
    def test_parse_key(self, raw: str, expected) -> None:
        assert cli._parse_key(raw) == expected

    def test_query_subcommand(self) -> None:
        args = cli._build_parser().parse_args(
            ["query", "--vector", "1,2,3", "--document", "1", "--document", "x", "--limit", "3"]
        )
        assert args.command == "query"
        assert args.vector == [1.0, 2.0, 3.0]
        assert args.document == [1, "x"]
        assert args.limit == 3
        assert args.offset == 0
        assert args.scope is None

    def test_scope_overrides(self) -> None:
        args = argparse.Namespace(scope="B")
        assert cli._scope_overrides(args) == {
            "document_scope": {"scope": "B"},
            "embedding_scope": {"scope": "B"},
        }
        assert cli._scope_overrides(argparse.Namespace(scope=None)) == {}

    def test_schema_rejects_unknown_algorithm(self) -> None:
        with pytest.raises(SystemExit):
            cli._build_parser().parse_args(["schema", "--algorithm", "hamming"])


# ======================================================================
# main()
# ======================================================================


class TestMain:
    def test_no_command_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run_main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_schema_uses_config_dimension(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run_main(["--config", _config_file(tmp_path), "schema"]) == 0
        out = capsys.readouterr().out
        assert '"vector" vector(4),' in out
        assert "vector_cosine_ops" in out

    def test_schema_flags(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run_main(
            [
                "--config",
                _config_file(tmp_path),
                "schema",
                "--dimension",
                "1536",
                "--algorithm",
                "l2",
                "--scope-column",
                "tenant",
            ]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "vector(1536)" in out
        assert "vector_l2_ops" in out
        assert '"tenant" TEXT NOT NULL' in out

    def test_schema_uses_configured_embedding_columns(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "mapped.yaml"
        path.write_text(
            "store:\n"
            "  vector_dimension: 4\n"
            "  embedding_columns:\n    vector: embedding\n    text: content\n"
        )
        assert _run_main(["--config", str(path), "schema"]) == 0
        out = capsys.readouterr().out
        assert '"embedding" vector(4),' in out
        assert '"content" TEXT NOT NULL,' in out
        assert '"document" INTEGER NOT NULL' in out
        assert '("embedding" vector_cosine_ops)' in out

    def test_missing_database_url_reports_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = _run_main(["--config", _config_file(tmp_path, url=""), "query", "--vector", "1"])
        assert code == 1
        assert "Error: [psycopg] No database URL configured" in capsys.readouterr().err

    def test_query_prints_json_lines(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        executor,
        embedding_rows,
    ) -> None:
        import pgkb.main

        executor.stream_rows = embedding_rows
        monkeypatch.setattr(pgkb.main, "build_executor", lambda config: _ExecutorContext(executor))

        code = _run_main(
            [
                "--config",
                _config_file(tmp_path),
                "query",
                "--vector",
                "2.5,3,4.5",
                "--document",
                "1",
                "--scope",
                "B",
            ]
        )

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line)["text"] for line in lines] == ["Hello", "World", "Foo"]
        assert executor.statements[0].values == ("[2.5,3.0,4.5]", "B", [1], 10, 0)


# ======================================================================
# Demo / query runners
# ======================================================================


class TestRunners:
    @pytest.mark.asyncio
    async def test_run_demo(
        self, executor, embedding_rows, capsys: pytest.CaptureFixture[str]
    ) -> None:
        executor.queue([{"id": 1}])
        executor.stream_rows = embedding_rows
        store = PostgresVectorStore(executor, document_scope={"scope": "test"})

        await cli.run_demo(store)

        out = capsys.readouterr().out
        assert "Created document with ID: 1" in out
        assert "Appended 3 embeddings to document." in out
        assert '"text":"Hello"' in out
        assert "Deleted document with ID: 1" in out
        # list, insert document, 3 embeddings, query, delete
        assert len(executor.statements) == 7
        assert executor.statements[-1].text.startswith('DELETE FROM "documents"')

    @pytest.mark.asyncio
    async def test_run_query_counts_results(
        self, executor, embedding_rows, capsys: pytest.CaptureFixture[str]
    ) -> None:
        executor.stream_rows = embedding_rows[:2]
        store = PostgresVectorStore(executor)

        printed = await cli.run_query(store, [1, 2, 3], None, limit=2, offset=0)

        assert printed == 2
        assert len(capsys.readouterr().out.splitlines()) == 2
