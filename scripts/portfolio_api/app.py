"""Application bootstrap helpers."""

from __future__ import annotations

from typing import Mapping, Optional

from aiohttp import web

from .config import load_settings
from .handlers.chat import handle_chat
from .handlers.contact import handle_send_message
from .handlers.health import handle_health
from .handlers.resume import handle_resume
from .state import BACKGROUND_TASKS, SETTINGS, drain_background


def make_app(settings: Optional[Mapping[str, str]] = None) -> web.Application:
    app = web.Application()
    app[SETTINGS] = dict(load_settings() if settings is None else settings)
    app[BACKGROUND_TASKS] = set()
    app.on_cleanup.append(drain_background)

    app.router.add_get("/health", handle_health)
    app.router.add_post("/api/gemini-chat", handle_chat)
    app.router.add_post("/api/gemini-resume", handle_resume)
    app.router.add_post("/api/send-message", handle_send_message)
    return app


async def start_server(
    host: str = "127.0.0.1",
    port: int = 8788,
    settings: Optional[Mapping[str, str]] = None,
) -> web.AppRunner:
    app = make_app(settings)
    # Disable default access logger to avoid redundant Apache-style logs
    runner = web.AppRunner(app, access_log=None)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    return runner


__all__ = ["make_app", "start_server"]
