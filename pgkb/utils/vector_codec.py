"""Conversion between Python number sequences and pgvector's text form.

pgvector accepts and (without a registered type adapter) returns vectors as
``[1,2,3]`` text literals.  Vectors are always sent as bound parameters in
this form, never spliced into SQL text.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from numbers import Integral, Real
from typing import Any


def is_vector_value(value: Any) -> bool:
    """Return ``True`` for values that should be bound as a vector literal."""
    return isinstance(value, (list, tuple))


def to_vector_literal(values: Iterable[Real]) -> str:
    """Serialize *values* to the ``[v1,v2,...]`` literal pgvector understands.

    Accepts any real numbers, including numpy scalars (e.g. the items of a
    ``float32`` embedding array).  Booleans and non-numeric items raise
    ``TypeError``.
    """
    parts: list[str] = []
    for item in values:
        if isinstance(item, bool) or not isinstance(item, Real):
            msg = f"Vector components must be numbers, got {item!r}"
            raise TypeError(msg)
        parts.append(str(int(item)) if isinstance(item, Integral) else str(float(item)))
    return "[" + ",".join(parts) + "]"


def parse_vector(raw: Any) -> list[float]:
    """Decode a vector column value into a list of floats.

    Handles the text literal returned when no pgvector adapter is registered,
    plain lists, and array-likes exposing ``tolist()`` (numpy arrays returned
    by ``pgvector.psycopg``).
    """
    if raw is None:
        msg = "Vector column is NULL"
        raise ValueError(msg)
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        decoded = json.loads(raw)
        if not isinstance(decoded, list):
            msg = f"Not a vector literal: {raw!r}"
            raise ValueError(msg)
        return [float(v) for v in decoded]
    if hasattr(raw, "tolist"):
        raw = raw.tolist()
    if isinstance(raw, Iterable):
        return [float(v) for v in raw]
    msg = f"Cannot decode vector from {type(raw).__name__}"
    raise TypeError(msg)
