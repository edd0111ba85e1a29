"""Scope: equality constraints applied to every read and write of a table.

A scope is an ordered mapping of column name to scalar value, e.g.
``{"tenant": "acme"}``.  It is fixed when the store is built and exposed
read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Union

from pgkb.utils.errors import ConfigurationError

ScopeValue = Union[str, int, float, bool, None]
Scope = Mapping[str, ScopeValue]

EMPTY_SCOPE: Scope = MappingProxyType({})


def freeze_scope(scope: Mapping[str, object] | None, name: str = "scope") -> Scope:
    """Validate *scope* and return an immutable copy preserving key order.

    Raises
    ------
    ConfigurationError
        If a key is not a non-empty string or a value is not a scalar.
    """
    if not scope:
        return EMPTY_SCOPE

    frozen: dict[str, ScopeValue] = {}
    for key, value in scope.items():
        if not isinstance(key, str) or not key:
            raise ConfigurationError(
                message=f"{name} keys must be non-empty column names, got {key!r}",
                provider_name="postgres",
            )
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise ConfigurationError(
                message=(
                    f"{name}[{key!r}] must be a string, number, boolean or None, "
                    f"got {type(value).__name__}"
                ),
                provider_name="postgres",
            )
        frozen[key] = value
    return MappingProxyType(frozen)
