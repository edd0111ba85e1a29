"""Identifier quoting for table and column names.

PostgreSQL has no bind-parameter slot for identifiers, so table and column
names are concatenated into the statement text.  They come from store
configuration rather than end users, but are still quoted: wrapped in double
quotes with every embedded double quote doubled, which the server's
identifier grammar reads back as the original string.
"""

from __future__ import annotations

_DELIMITER = '"'


def quote_identifier(name: str) -> str:
    """Return *name* as a delimited identifier, e.g. ``a"b`` -> ``"a""b"``."""
    return _DELIMITER + name.replace(_DELIMITER, _DELIMITER * 2) + _DELIMITER
