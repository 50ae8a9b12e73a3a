"""/api/gemini-chat handler: portfolio Q&A grounded on the resume profile."""

from __future__ import annotations

import logging

from aiohttp import web

from .. import config
from ..dispatcher import call_llm_with_fallback
from ..errors import PortfolioError
from ..notify import InteractionKind, log_to_discord
from ..prompts.base import build_chat_prompt
from ..state import get_settings, run_in_background
from ..turnstile import verify_turnstile
from ..utils import truncate
from .common import client_ip, json_error, read_json_object


log = logging.getLogger(__name__)

_FIELD_LIMIT = 1024


async def handle_chat(request: web.Request) -> web.Response:
    settings = get_settings(request)
    timeout = config.request_timeout(settings)

    body = await read_json_object(request)
    if body is None:
        return json_error("Invalid JSON body.", 400)

    verification = await verify_turnstile(
        body.get("token"),
        settings.get(config.TURNSTILE_SECRET_KEY),
        client_ip(request),
        timeout=timeout,
    )
    if not verification.success:
        return json_error(verification.error or "Bot check failed", 403)

    question = body.get("question")
    if not question or not isinstance(question, str):
        return json_error("Question is required.", 400)

    try:
        answer = await call_llm_with_fallback(settings, build_chat_prompt(question), False)
    except PortfolioError as exc:
        log.error("Chat failed: %s", exc)
        return json_error("Failed to chat.", 503)

    run_in_background(
        request.app,
        log_to_discord(
            settings.get(config.DISCORD_CHAT_WEBHOOK_URL),
            "\U0001f4ac New Chat Interaction",
            [
                {"name": "User Question", "value": truncate(question, _FIELD_LIMIT)},
                {"name": "AI Answer", "value": truncate(answer, _FIELD_LIMIT)},
            ],
            request.headers,
            InteractionKind.CHAT,
            timeout=timeout,
        ),
    )

    return web.json_response({"answer": answer})


__all__ = ["handle_chat"]
