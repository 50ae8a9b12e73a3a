"""Translator for the OpenAI-compatible Chat Completions format.

Used for the LiteLLM proxy, which fronts Gemini behind ``/v1/chat/completions``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


def build_request_body(model: str, prompt: str, structured: bool = False) -> Dict[str, Any]:
    """Wrap ``prompt`` as a single user message."""
    body: Dict[str, Any] = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
    }
    if structured:
        body["response_format"] = {"type": "json_object"}
    return body


def extract_response_text(payload: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` or None when absent."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if isinstance(content, str) and content:
        return content
    return None


__all__ = ["build_request_body", "extract_response_text"]
