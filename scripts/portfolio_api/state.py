"""Application-scoped state: settings snapshot and background tasks."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Dict, Mapping, Set

from aiohttp import web


log = logging.getLogger(__name__)

SETTINGS: web.AppKey[Dict[str, str]] = web.AppKey("settings", dict)
BACKGROUND_TASKS: web.AppKey[Set["asyncio.Task[Any]"]] = web.AppKey("background_tasks", set)


def get_settings(request: web.Request) -> Mapping[str, str]:
    return request.app[SETTINGS]


def run_in_background(app: web.Application, coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any]":
    """Schedule ``coro`` without delaying the response; the app keeps a reference."""
    tasks = app[BACKGROUND_TASKS]
    task = asyncio.create_task(coro)
    tasks.add(task)
    task.add_done_callback(tasks.discard)
    return task


async def drain_background(app: web.Application) -> None:
    """Wait for pending background work on shutdown."""
    tasks = list(app[BACKGROUND_TASKS])
    if not tasks:
        return
    log.info("Waiting for %d background task(s)", len(tasks))
    results = await asyncio.gather(*tasks, return_exceptions=True)
    for result in results:
        if isinstance(result, Exception):
            log.error("Background task failed: %s", result)


__all__ = [
    "SETTINGS",
    "BACKGROUND_TASKS",
    "get_settings",
    "run_in_background",
    "drain_background",
]
