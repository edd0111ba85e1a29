"""Custom exception hierarchy for pgkb.

All errors raised by pgkb itself inherit from :class:`PgKBError`, which
carries an optional ``provider_name`` so handlers can tell which backend
(e.g. "postgres", "psycopg") was involved.

    PgKBError  (base -- catch-all for any pgkb error)
    +-- ConfigurationError       (invalid store / settings configuration)
    +-- ContractViolationError   (database returned an impossible result)

Errors raised by the database driver are NOT wrapped: they propagate to the
caller with their original type so that callers can match on
``psycopg.errors.*`` directly.
"""


class PgKBError(Exception):
    """Base exception for all pgkb errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets
    for structured log output, e.g. ``[postgres] Expected one row``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ConfigurationError(PgKBError):
    """Raised when store or application configuration is invalid.

    Covers unknown distance algorithms, non-scalar scope values and a
    missing database URL.  Always raised before any statement is issued.
    """

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ContractViolationError(PgKBError, AssertionError):
    """Raised when the database answers in a way the schema should forbid.

    For example an ``INSERT ... RETURNING "id"`` that yields zero or several
    rows.  This points at a logic or schema bug and must never be swallowed.
    """

    def __init__(
        self,
        message: str = "Database result violated the expected contract",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
