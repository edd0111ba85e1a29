"""Small helpers for working with lazy (async) sequences.

The store hands out async iterators for potentially large reads and accepts
either sync or async iterables for writes.  These helpers bridge the two.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import TypeVar

_T = TypeVar("_T")


async def iterate(source: Iterable[_T] | AsyncIterable[_T]) -> AsyncIterator[_T]:
    """Yield the items of a sync or async iterable, one at a time, in order."""
    if isinstance(source, AsyncIterable):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item


async def collect(source: AsyncIterable[_T], limit: int | None = None) -> list[_T]:
    """Drain *source* into a list.

    With *limit*, stop after that many items and close the source so any
    connection it holds goes back to the pool.
    """
    items: list[_T] = []
    iterator = aiter(source)
    try:
        if limit is not None and limit <= 0:
            return items
        async for item in iterator:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
    finally:
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()
    return items
