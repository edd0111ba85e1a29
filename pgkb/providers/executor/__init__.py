"""Query executor implementations.

PsycopgQueryExecutor runs statements through a psycopg 3 async connection
pool.  Any other driver can be plugged in by implementing IQueryExecutor.
"""

from pgkb.providers.executor.psycopg_executor import PsycopgQueryExecutor

__all__ = ["PsycopgQueryExecutor"]
