"""Application settings loaded from environment variables via pydantic-settings.

Sources, highest priority first:

  1. Environment variables, prefixed ``PGKB_`` (``PGKB_DATABASE_URL=...``)
  2. A ``.env`` file in the working directory
  3. The defaults below

Scopes and column mappings are mappings, which do not fit environment
variables well; they live in the YAML file read by :func:`load_config`.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """pgkb settings.  Environment variables override defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PGKB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Database ===
    # Empty = not configured; build_executor() refuses to start without it.
    database_url: str = ""
    pool_min_size: int = 1
    pool_max_size: int = 10

    # === Store ===
    distance_algorithm: str = "cosine"
    document_table: str = "documents"
    embedding_table: str = "embeddings"
    # Only used when rendering example DDL.
    vector_dimension: int = 3

    # === Logging ===
    log_level: str = "INFO"
