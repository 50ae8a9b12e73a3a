"""Translator for Gemini's native ``generateContent`` format."""

from __future__ import annotations

from typing import Any, Dict, Optional


def build_request_body(model: str, prompt: str, structured: bool = False) -> Dict[str, Any]:
    """Wrap ``prompt`` as a single content part.

    The model is part of the endpoint path for this shape, so ``model`` is not
    written into the body.
    """
    body: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
    if structured:
        body["generationConfig"] = {"responseMimeType": "application/json"}
    return body


def extract_response_text(payload: Any) -> Optional[str]:
    """Return ``candidates[0].content.parts[0].text`` or None when absent."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return None
    content = candidate.get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if isinstance(text, str) and text:
        return text
    return None


__all__ = ["build_request_body", "extract_response_text"]
