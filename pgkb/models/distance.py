"""Distance algorithms supported by pgvector.

Each algorithm maps to exactly one ordering operator and one index operator
class.  There is no default fallback: an unknown algorithm is a
:class:`~pgkb.utils.errors.ConfigurationError`.
"""

from __future__ import annotations

from enum import Enum

from pgkb.utils.errors import ConfigurationError


class DistanceAlgorithm(str, Enum):
    """Vector distance functions understood by the pgvector extension."""

    L1 = "l1"
    L2 = "l2"
    NEGATIVE_INNER_PRODUCT = "negative_inner_product"
    COSINE = "cosine"


DISTANCE_OPERATORS: dict[DistanceAlgorithm, str] = {
    DistanceAlgorithm.L2: "<->",
    DistanceAlgorithm.L1: "<+>",
    DistanceAlgorithm.NEGATIVE_INNER_PRODUCT: "<#>",
    DistanceAlgorithm.COSINE: "<=>",
}

# Operator classes for CREATE INDEX ... USING hnsw (column <opclass>).
OPERATOR_CLASSES: dict[DistanceAlgorithm, str] = {
    DistanceAlgorithm.L2: "vector_l2_ops",
    DistanceAlgorithm.L1: "vector_l1_ops",
    DistanceAlgorithm.NEGATIVE_INNER_PRODUCT: "vector_ip_ops",
    DistanceAlgorithm.COSINE: "vector_cosine_ops",
}


def resolve_algorithm(value: DistanceAlgorithm | str) -> DistanceAlgorithm:
    """Coerce *value* into a :class:`DistanceAlgorithm` or raise ConfigurationError."""
    try:
        return DistanceAlgorithm(value)
    except ValueError:
        supported = ", ".join(a.value for a in DistanceAlgorithm)
        raise ConfigurationError(
            message=f"Unsupported distance algorithm: {value!r} (expected one of: {supported})",
            provider_name="postgres",
        ) from None


def distance_operator(algorithm: DistanceAlgorithm | str) -> str:
    """Return the pgvector ordering operator for *algorithm*."""
    return DISTANCE_OPERATORS[resolve_algorithm(algorithm)]


def operator_class(algorithm: DistanceAlgorithm | str) -> str:
    """Return the pgvector index operator class for *algorithm*."""
    return OPERATOR_CLASSES[resolve_algorithm(algorithm)]
