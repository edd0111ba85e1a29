"""pgkb domain models - re-exports all public model classes.

    - distance.py   - DistanceAlgorithm and its operator / index mappings
    - embedding.py  - Embedding, EmbeddingRow, EmbeddingResult, EmbeddingColumn
    - scope.py      - Scope type and validation
"""

from pgkb.models.distance import DistanceAlgorithm, distance_operator, operator_class
from pgkb.models.embedding import Embedding, EmbeddingColumn, EmbeddingResult, EmbeddingRow
from pgkb.models.scope import Scope, ScopeValue, freeze_scope

__all__ = [
    "DistanceAlgorithm",
    "Embedding",
    "EmbeddingColumn",
    "EmbeddingResult",
    "EmbeddingRow",
    "Scope",
    "ScopeValue",
    "distance_operator",
    "freeze_scope",
    "operator_class",
]
