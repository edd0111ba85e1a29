"""Utility modules for pgkb.

Available utility modules (all re-exported here for convenience):

- **errors** -- Exception hierarchy rooted at PgKBError.  Database driver
  errors are never wrapped; only pgkb's own failures live here.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **streams** -- Bridging helpers between sync/async iterables and lists.
- **vector_codec** -- pgvector text-literal serialization and parsing.
"""

# -- Exception hierarchy ---------------------------------------------------
from pgkb.utils.errors import ConfigurationError, ContractViolationError, PgKBError

# -- Structured logging setup ----------------------------------------------
from pgkb.utils.logging import configure_logging

# -- Lazy sequence helpers -------------------------------------------------
from pgkb.utils.streams import collect, iterate

# -- pgvector literal codec ------------------------------------------------
from pgkb.utils.vector_codec import is_vector_value, parse_vector, to_vector_literal

__all__ = [
    "ConfigurationError",
    "ContractViolationError",
    "PgKBError",
    "collect",
    "configure_logging",
    "is_vector_value",
    "iterate",
    "parse_vector",
    "to_vector_literal",
]
