"""
Catalog API — Relation Aggregator
===================================

What:  Fork-join helper that fetches a primary entity's related rows
       concurrently and hands them back keyed by relation name.
How:   Each fetch becomes a task inside one asyncio.TaskGroup. The join waits
       for every task; there is no ordering guarantee between them. If one
       fetch fails the group cancels its siblings and the failure propagates
       as-is, so a request either gets every relation or none (no partial
       responses).
Who:   Repositories building denormalized responses (product with brand,
       supplier, categories, images; order with items and user; episode with
       characters) and the paginator (count + page).

Absent relations:
    `optional(key, fetch)` resolves to None without querying when the foreign
    key is NULL. None serializes as JSON null, the explicit "absent" marker.

Example:
    relations = await gather_relations(
        brand=optional(product.brand_id, self._brand_by_id),
        images=self._images_for(product.id),
    )
    relations["brand"]   # None when the product has no brand
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K")


async def optional(key: Optional[K], fetch: Callable[[K], Awaitable[T]]) -> Optional[T]:
    """Awaits `fetch(key)`, or returns None when `key` is None."""
    if key is None:
        return None
    return await fetch(key)


def _first_failure(group: BaseExceptionGroup) -> BaseException:
    failure: BaseException = group
    while isinstance(failure, BaseExceptionGroup):
        failure = failure.exceptions[0]
    return failure


async def gather_relations(**fetches: Awaitable[Any]) -> Dict[str, Any]:
    """
    Runs every awaitable concurrently and returns `{name: result}`.

    Raises:
        The first exception raised by any fetch, unwrapped from the
        ExceptionGroup the TaskGroup produces (normally a DatabaseError).
    """
    tasks: Dict[str, "asyncio.Task[Any]"] = {}
    try:
        async with asyncio.TaskGroup() as group:
            for name, fetch in fetches.items():
                tasks[name] = group.create_task(_run(fetch))
    except BaseExceptionGroup as failures:
        raise _first_failure(failures) from None
    return {name: task.result() for name, task in tasks.items()}


async def _run(fetch: Awaitable[T]) -> T:
    return await fetch
