"""Unit tests for pgkb.sql.identifiers."""

from __future__ import annotations

import pytest

from pgkb.sql.identifiers import quote_identifier


def _parse_identifier(quoted: str) -> str:
    """Read a delimited identifier back the way PostgreSQL does."""
    assert quoted.startswith('"') and quoted.endswith('"')
    body = quoted[1:-1]
    # Every quote inside the body must be part of a doubled pair.
    assert body.replace('""', "").count('"') == 0
    return body.replace('""', '"')


class TestQuoteIdentifier:
    def test_plain_name(self) -> None:
        assert quote_identifier("documents") == '"documents"'

    def test_embedded_quote_is_doubled(self) -> None:
        assert quote_identifier('a"b') == '"a""b"'

    def test_empty_string(self) -> None:
        assert quote_identifier("") == '""'

    def test_case_and_spaces_preserved(self) -> None:
        assert quote_identifier("My Table") == '"My Table"'

    @pytest.mark.parametrize(
        "name",
        [
            '"',
            '""',
            'x"; DROP TABLE documents; --',
            'tab"le"',
            "per%cent",
            "ünïcödé",
        ],
    )
    def test_round_trips_through_identifier_grammar(self, name: str) -> None:
        assert _parse_identifier(quote_identifier(name)) == name
