"""/api/send-message handler: relay the contact form to Discord.

1. Verify the Turnstile token
2. Forward the message to the contact webhook
"""

from __future__ import annotations

import asyncio
import logging

from aiohttp import web

from .. import config
from ..notify import post_contact_message
from ..state import get_settings
from ..turnstile import verify_turnstile
from .common import client_ip, json_error, read_json_object


log = logging.getLogger(__name__)

_TOKEN_FIELD = "cf-turnstile-response"
_REQUIRED_FIELDS = ("fullName", "email", "message")


async def handle_send_message(request: web.Request) -> web.Response:
    settings = get_settings(request)
    webhook_url = settings.get(config.DISCORD_WEBHOOK_URL)
    secret_key = settings.get(config.TURNSTILE_SECRET_KEY)

    if not webhook_url or not secret_key:
        log.error("Contact form is missing DISCORD_WEBHOOK_URL or TURNSTILE_SECRET_KEY")
        return json_error("Server configuration error.", 500)

    try:
        body = await read_json_object(request)
        if body is None:
            return json_error("Invalid JSON body.", 400)

        token = body.get(_TOKEN_FIELD)
        if not token:
            return json_error("Missing verification token.", 400)

        timeout = config.request_timeout(settings)
        verification = await verify_turnstile(token, secret_key, client_ip(request), timeout=timeout)
        if not verification.success:
            return json_error("Verification failed.", 403)

        if any(not body.get(name) for name in _REQUIRED_FIELDS):
            return json_error("Missing required fields.", 400)

        if await post_contact_message(webhook_url, body, timeout=timeout):
            return web.json_response({"success": True})
        return json_error("Discord integration failed.", 500)

    except asyncio.CancelledError:
        raise
    except Exception:
        log.exception("Contact form relay failed")
        return json_error("Internal Server Error", 500)


__all__ = ["handle_send_message"]
