"""Discord webhook notifications for contact messages and AI interactions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from aiohttp import ClientSession, ClientTimeout

from .config import DEFAULT_REQUEST_TIMEOUT


log = logging.getLogger(__name__)

COLOR_GREEN = 0x10B981
COLOR_PURPLE = 0x8B5CF6
LOGGER_FOOTER = "Portfolio AI Logger v1.0"
CONTACT_FOOTER = "Verified via Cloudflare Turnstile"


class InteractionKind(str, Enum):
    CHAT = "CHAT"
    RESUME = "RESUME"


@dataclass(frozen=True)
class DeviceInfo:
    browser: str
    os: str
    device_type: str


def parse_user_agent(user_agent: Optional[str]) -> DeviceInfo:
    """Coarse browser/OS/device detection from a User-Agent string.

    Checks run in a fixed order, so e.g. Edge (which also advertises Chrome)
    reports as Chrome.
    """
    if not user_agent:
        return DeviceInfo("Unknown", "Unknown", "Unknown")

    browser = "Unknown Browser"
    for marker, name in (("Firefox", "Firefox"), ("Chrome", "Chrome"), ("Safari", "Safari"), ("Edge", "Edge")):
        if marker in user_agent:
            browser = name
            break

    os_name = "Unknown OS"
    if "Win" in user_agent:
        os_name = "Windows"
    elif "Mac" in user_agent:
        os_name = "MacOS"
    elif "Linux" in user_agent:
        os_name = "Linux"
    elif "Android" in user_agent:
        os_name = "Android"
    elif "iOS" in user_agent or "iPhone" in user_agent:
        os_name = "iOS"

    device_type = "Desktop"
    if "Mobile" in user_agent or "Android" in user_agent or "iPhone" in user_agent:
        device_type = "Mobile"
    elif "Tablet" in user_agent or "iPad" in user_agent:
        device_type = "Tablet"

    return DeviceInfo(browser, os_name, device_type)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def metadata_field(headers: Mapping[str, str]) -> Dict[str, Any]:
    ip = headers.get("CF-Connecting-IP") or "Unknown IP"
    country = headers.get("CF-IPCountry") or "Unknown Country"
    device = parse_user_agent(headers.get("User-Agent") or "")
    return {
        "name": "\U0001f575\ufe0f User Metadata",
        "value": (
            f"**IP:** {ip} ({country})\n"
            f"**Device:** {device.device_type} ({device.os})\n"
            f"**Browser:** {device.browser}"
        ),
        "inline": False,
    }


def build_embed(
    title: str,
    fields: List[Dict[str, Any]],
    headers: Mapping[str, str],
    kind: InteractionKind = InteractionKind.CHAT,
) -> Dict[str, Any]:
    color = COLOR_PURPLE if kind is InteractionKind.RESUME else COLOR_GREEN
    return {
        "embeds": [
            {
                "title": title,
                "color": color,
                "fields": [*fields, metadata_field(headers)],
                "timestamp": _timestamp(),
                "footer": {"text": LOGGER_FOOTER},
            }
        ]
    }


def build_contact_embed(form: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "embeds": [
            {
                "title": "\U0001f680 New Portfolio Contact",
                "color": COLOR_GREEN,
                "fields": [
                    {"name": "\U0001f464 Full Name", "value": form["fullName"], "inline": True},
                    {"name": "\U0001f4e7 Email", "value": form["email"], "inline": True},
                    {"name": "\U0001f4f1 Phone", "value": form.get("phone") or "Not Provided", "inline": True},
                    {"name": "\U0001f4dd Message", "value": form["message"]},
                ],
                "footer": {"text": CONTACT_FOOTER},
                "timestamp": _timestamp(),
            }
        ]
    }


async def _post_webhook(
    webhook_url: str,
    payload: Dict[str, Any],
    session: Optional[ClientSession],
    timeout: float,
) -> int:
    client_timeout = ClientTimeout(total=timeout)
    if session is not None:
        async with session.post(webhook_url, json=payload, timeout=client_timeout) as resp:
            return resp.status
    async with ClientSession(timeout=client_timeout) as owned:
        async with owned.post(webhook_url, json=payload, timeout=client_timeout) as resp:
            return resp.status


async def log_to_discord(
    webhook_url: Optional[str],
    title: str,
    fields: List[Dict[str, Any]],
    headers: Mapping[str, str],
    kind: InteractionKind = InteractionKind.CHAT,
    *,
    session: Optional[ClientSession] = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> None:
    """Send an interaction log embed; failures are logged, never raised."""
    if not webhook_url:
        log.warning("No webhook URL provided for %s. Logging skipped.", kind.value)
        return

    try:
        payload = build_embed(title, fields, headers, kind)
        status = await _post_webhook(webhook_url, payload, session, timeout)
        if not 200 <= status < 300:
            log.error("Discord webhook for %s answered %s", kind.value, status)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        log.error("Failed to log to Discord: %s", exc)


async def post_contact_message(
    webhook_url: str,
    form: Mapping[str, Any],
    *,
    session: Optional[ClientSession] = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> bool:
    """Relay a contact form to Discord; return True on a 2xx answer."""
    status = await _post_webhook(webhook_url, build_contact_embed(form), session, timeout)
    if not 200 <= status < 300:
        log.error("Discord contact webhook answered %s", status)
        return False
    return True


__all__ = [
    "InteractionKind",
    "DeviceInfo",
    "parse_user_agent",
    "build_embed",
    "build_contact_embed",
    "log_to_discord",
    "post_contact_message",
]
