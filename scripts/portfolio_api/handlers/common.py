"""Helpers shared by the public POST handlers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from aiohttp import web

from ..errors import error_payload


def client_ip(request: web.Request) -> str:
    return request.headers.get("CF-Connecting-IP") or ""


async def read_json_object(request: web.Request) -> Optional[Dict[str, Any]]:
    """Return the JSON object body, or None when it is missing or malformed."""
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def json_error(message: str, status: int) -> web.Response:
    return web.json_response(error_payload(message), status=status)


__all__ = ["client_ip", "read_json_object", "json_error"]
