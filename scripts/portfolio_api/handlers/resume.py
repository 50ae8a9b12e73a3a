"""/api/gemini-resume handler: score a job description against the resume."""

from __future__ import annotations

import json
import logging

from aiohttp import web

from .. import config
from ..dispatcher import call_llm_with_fallback
from ..errors import PortfolioError
from ..notify import InteractionKind, log_to_discord
from ..prompts.base import build_resume_prompt, strip_code_fences
from ..state import get_settings, run_in_background
from ..turnstile import verify_turnstile
from ..utils import truncate
from .common import client_ip, json_error, read_json_object


log = logging.getLogger(__name__)

_JD_PREVIEW_LIMIT = 500


def _log_fields(job_description: str, text: str):
    """Build Discord fields from the analysis, or None if it is not a JSON object."""
    try:
        result = json.loads(text)
    except ValueError as exc:
        log.error("Logging parse error: %s", exc)
        return None
    if not isinstance(result, dict):
        log.error("Logging parse error: analysis is not a JSON object")
        return None

    score = result.get("match_score") or "N/A"
    verdict = result.get("verdict") or "No verdict provided"
    return [
        {"name": "Input Job Description", "value": truncate(job_description, _JD_PREVIEW_LIMIT, "...")},
        {"name": "Match Score", "value": f"{score}/100", "inline": True},
        {"name": "Verdict", "value": str(verdict), "inline": True},
    ]


async def handle_resume(request: web.Request) -> web.Response:
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

    job_description = body.get("jobDescription")
    if not job_description or not isinstance(job_description, str):
        return json_error("Job description is required.", 400)

    try:
        text = await call_llm_with_fallback(settings, build_resume_prompt(job_description), True)
    except PortfolioError as exc:
        log.error("Resume analysis failed: %s", exc)
        return json_error("Failed to analyze resume.", 503)

    text = strip_code_fences(text)

    fields = _log_fields(job_description, text)
    if fields is not None:
        run_in_background(
            request.app,
            log_to_discord(
                settings.get(config.DISCORD_RESUME_WEBHOOK_URL),
                "\U0001f4c4 New Resume Analysis",
                fields,
                request.headers,
                InteractionKind.RESUME,
                timeout=timeout,
            ),
        )

    return web.Response(text=text, content_type="application/json")


__all__ = ["handle_resume"]
