"""Structured fan-out for independent coroutines."""

import asyncio
from collections.abc import Awaitable
from typing import Any


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Run ``aws`` concurrently and return their results in argument order.

    All children live in one ``asyncio.TaskGroup``: the first failure
    cancels the siblings still running and is re-raised unwrapped, and
    cancelling the caller cancels every child.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(_as_coroutine(aw)) for aw in aws]
    except BaseExceptionGroup as group:
        raise group.exceptions[0] from None
    return [task.result() for task in tasks]


async def _as_coroutine(aw: Awaitable[Any]) -> Any:
    return await aw
