"""Cloudflare Turnstile bot verification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from aiohttp import ClientSession, ClientTimeout, FormData

from .config import DEFAULT_REQUEST_TIMEOUT


log = logging.getLogger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    error: Optional[str] = None


async def _siteverify(session: ClientSession, url: str, form: FormData, timeout: ClientTimeout) -> dict:
    async with session.post(url, data=form, timeout=timeout) as result:
        return await result.json(content_type=None)


async def verify_turnstile(
    token: Optional[str],
    secret_key: Optional[str],
    remote_ip: Optional[str] = None,
    *,
    session: Optional[ClientSession] = None,
    verify_url: str = SITEVERIFY_URL,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> VerificationResult:
    """Verify a Turnstile token issued to the front end.

    Never raises for verification problems; the outcome is reported through
    ``VerificationResult.error``.
    """
    if not token:
        return VerificationResult(False, "Missing Turnstile token")

    form = FormData()
    form.add_field("secret", secret_key or "")
    form.add_field("response", token)
    form.add_field("remoteip", remote_ip or "")

    client_timeout = ClientTimeout(total=timeout)
    try:
        if session is not None:
            outcome = await _siteverify(session, verify_url, form, client_timeout)
        else:
            async with ClientSession(timeout=client_timeout) as owned:
                outcome = await _siteverify(owned, verify_url, form, client_timeout)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        log.error("Turnstile verification error: %s", exc)
        return VerificationResult(False, "Verification server error")

    if not isinstance(outcome, dict) or not outcome.get("success"):
        codes = outcome.get("error-codes") if isinstance(outcome, dict) else outcome
        log.error("Turnstile verification failed: %s", codes)
        return VerificationResult(False, "Bot check failed")

    return VerificationResult(True)


__all__ = ["SITEVERIFY_URL", "VerificationResult", "verify_turnstile"]
