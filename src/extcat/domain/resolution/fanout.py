"""Structured fan-out of independent registry queries."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Coroutine, Iterable


async def gather_in_order[T](queries: Iterable[Coroutine[object, object, T]]) -> list[T]:
    """Await ``queries`` concurrently and return their results in input order.

    The first failure cancels every query still running and is re-raised as is,
    not wrapped in an exception group.
    """

    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(query) for query in queries]
    except BaseExceptionGroup as failures:
        raise _first_failure(failures) from None
    return [task.result() for task in tasks]


def _first_failure(failures: BaseExceptionGroup[BaseException]) -> BaseException:
    failure: BaseException = failures
    while isinstance(failure, BaseExceptionGroup):
        failure = failure.exceptions[0]
    return failure
