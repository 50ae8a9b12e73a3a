"""LLM dispatch with ordered provider fallback.

Candidates are tried strictly in order, one attempt each. The first candidate
that answers 2xx with non-empty text wins and later candidates are never
contacted. When every candidate fails, ``AllProvidersFailed`` is raised with
the per-candidate failures attached.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from aiohttp import ClientSession, ClientTimeout

from . import logging_control
from .config import DEFAULT_REQUEST_TIMEOUT, ProviderConfig, request_timeout
from .errors import AllProvidersFailed, CandidateFailure, extract_error_details
from .resolver import resolve_candidates
from .translators import get_translator
from .utils import mask_headers, mask_url, truncate


log = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 1000


def _log_upstream(candidate: ProviderConfig, payload: Dict[str, Any]) -> None:
    if not logging_control.is_enabled():
        return
    log.info("Upstream request: provider=%s model=%s", candidate.name, candidate.model)
    log.info("  url=%s", mask_url(candidate.endpoint))
    log.info("  headers=%s", mask_headers(candidate.headers))
    try:
        log.info("  body=%s", json.dumps(payload, ensure_ascii=False))
    except (TypeError, ValueError):
        log.info("  body=<unserializable>")


async def _attempt(
    session: ClientSession,
    candidate: ProviderConfig,
    prompt: str,
    structured: bool,
    timeout: ClientTimeout,
) -> str:
    """Run one candidate; return its text or raise ``CandidateFailure``."""
    translator = get_translator(candidate.shape)
    body = translator.build_request_body(candidate.model, prompt, structured)
    _log_upstream(candidate, body)

    try:
        async with session.post(
            candidate.endpoint,
            json=body,
            headers=dict(candidate.headers),
            timeout=timeout,
        ) as upstream:
            status = upstream.status
            raw = await upstream.text()
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        reason = str(exc) or type(exc).__name__
        raise CandidateFailure(candidate.name, f"{candidate.name} request failed: {reason}") from exc

    if logging_control.is_enabled():
        log.info("Upstream response: provider=%s status=%s", candidate.name, status)

    if not 200 <= status < 300:
        detail = truncate(extract_error_details(raw), _ERROR_BODY_LIMIT, "...")
        raise CandidateFailure(
            candidate.name,
            f"{candidate.name} API Error {status}: {detail}",
            status=status,
            body=raw,
        )

    try:
        payload = json.loads(raw)
    except ValueError:
        payload = None

    text = translator.extract_response_text(payload)
    if not text:
        raise CandidateFailure(candidate.name, f"{candidate.name} returned empty response.", status=status)
    return text


async def _dispatch(
    session: ClientSession,
    candidates: Sequence[ProviderConfig],
    prompt: str,
    structured: bool,
    timeout: ClientTimeout,
) -> str:
    failures: List[CandidateFailure] = []
    for candidate in candidates:
        try:
            return await _attempt(session, candidate, prompt, structured, timeout)
        except CandidateFailure as failure:
            log.warning("[LLM Fallback] %s failed: %s", candidate.name, failure.message)
            failures.append(failure)
    raise AllProvidersFailed(failures)


async def dispatch(
    candidates: Sequence[ProviderConfig],
    prompt: str,
    structured: bool = False,
    *,
    session: Optional[ClientSession] = None,
    timeout: Optional[float] = None,
) -> str:
    """Try ``candidates`` in order and return the first non-empty answer.

    Args:
        candidates: Provider configs in fallback order.
        prompt: Fully formed prompt text.
        structured: Ask each provider for JSON output.
        session: Optional shared client session; one is created (and closed)
            per call otherwise.
        timeout: Total seconds per request, applied whichever session is used.

    Raises:
        AllProvidersFailed: every candidate failed or answered empty.
    """
    client_timeout = ClientTimeout(total=timeout or DEFAULT_REQUEST_TIMEOUT)
    if session is not None:
        return await _dispatch(session, candidates, prompt, structured, client_timeout)

    async with ClientSession(timeout=client_timeout) as owned:
        return await _dispatch(owned, candidates, prompt, structured, client_timeout)


async def call_llm_with_fallback(
    settings: Mapping[str, str],
    prompt: str,
    structured: bool = False,
    *,
    session: Optional[ClientSession] = None,
) -> str:
    """Resolve candidates from ``settings`` and dispatch ``prompt``.

    Raises:
        ConfigurationError: mandatory credentials are missing (no network use).
        AllProvidersFailed: no candidate produced text.
    """
    candidates = resolve_candidates(settings)
    return await dispatch(
        candidates,
        prompt,
        structured,
        session=session,
        timeout=request_timeout(settings),
    )


__all__ = ["dispatch", "call_llm_with_fallback"]
