"""Embedding data models.

Pydantic v2 models for the rows stored in the embedding table and the rows
returned by a nearest-neighbour query.  All models are frozen: an embedding
is immutable once appended, there is no update operation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmbeddingColumn(str, Enum):
    """Logical embedding column names.

    A store's ``map_embedding_column`` callable translates these to the
    physical column names of the embedding table.
    """

    VECTOR = "vector"
    TEXT = "text"
    DOCUMENT = "document"


# ---------------------------------------------------------------------------
# Embedding - what callers append.
# ---------------------------------------------------------------------------
class Embedding(BaseModel):
    """A piece of text and the vector an embedding model produced for it."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="The embedded text.")
    vector: list[float] = Field(
        min_length=1,
        description="The embedding vector; its length must match the column dimension.",
    )


# ---------------------------------------------------------------------------
# EmbeddingRow - the physical row shape.
# ---------------------------------------------------------------------------
class EmbeddingRow(Embedding):
    """An :class:`Embedding` together with the key of its owning document."""

    document: Any = Field(description="Primary key of the owning document.")


# ---------------------------------------------------------------------------
# EmbeddingResult - one hit of a nearest-neighbour query.
# ---------------------------------------------------------------------------
class EmbeddingResult(BaseModel):
    """An embedding row returned by :meth:`query` with its computed distance.

    Smaller distances mean more similar for every supported algorithm
    (inner product is negated by pgvector's ``<#>`` operator).  A row whose
    vector column is NULL has ``vector`` and ``distance`` set to ``None``.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    vector: list[float] | None
    distance: float | None
    document: Any
