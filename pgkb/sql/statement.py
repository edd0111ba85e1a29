"""Composable parameterized SQL statements.

:class:`SQLStatement` keeps statement text and its bound values side by side.
Raw SQL (keywords, quoted identifiers) is appended as text; data values are
only ever added through :meth:`SQLStatement.bind`, which writes a ``%s``
placeholder and records the value.  The text uses psycopg's placeholder
syntax, so a literal ``%`` in appended raw SQL is escaped to ``%%``.

Executors must always pass :attr:`SQLStatement.values` (even when empty) so
the driver un-escapes ``%%``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

PLACEHOLDER = "%s"


class SQLStatement:
    """Statement text plus positional bound values.

    ``append`` and ``bind`` mutate the statement and return it, so builders
    can chain calls::

        stmt = SQLStatement("SELECT * FROM ").append(quote_identifier(table))
        stmt.append(" WHERE \\"id\\" = ").bind(key)
    """

    __slots__ = ("_text", "_values")

    def __init__(self, sql: str = "") -> None:
        self._text = ""
        self._values: list[Any] = []
        if sql:
            self.append(sql)

    @property
    def text(self) -> str:
        return self._text

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self._values)

    def is_empty(self) -> bool:
        return not self._text

    def append(self, fragment: SQLStatement | str) -> SQLStatement:
        """Append raw SQL text or another statement (with its values)."""
        if isinstance(fragment, SQLStatement):
            self._text += fragment._text
            self._values.extend(fragment._values)
        else:
            self._text += fragment.replace("%", "%%")
        return self

    def bind(self, value: Any) -> SQLStatement:
        """Append a placeholder bound to *value*."""
        self._text += PLACEHOLDER
        self._values.append(value)
        return self

    @classmethod
    def join(cls, statements: Iterable[SQLStatement], separator: str) -> SQLStatement:
        """Join non-empty *statements* with the raw SQL *separator*."""
        joined = cls()
        first = True
        for statement in statements:
            if statement.is_empty():
                continue
            if not first:
                joined.append(separator)
            joined.append(statement)
            first = False
        return joined

    def __repr__(self) -> str:
        return f"SQLStatement(text={self._text!r}, values={self.values!r})"
