"""Miscellaneous helpers used across backend modules."""

from __future__ import annotations

from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


_SECRET_QUERY_KEYS = {"key", "api_key", "apikey", "token", "secret"}


def mask_secret(value: Optional[str]) -> str:
    if not value:
        return ""
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"


def mask_url(url: str) -> str:
    """Mask credential-looking query parameters in a URL."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (key, mask_secret(value) if key.lower() in _SECRET_QUERY_KEYS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*.")))


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        key: mask_secret(value) if "key" in key.lower() or "authorization" in key.lower() else value
        for key, value in headers.items()
    }


def truncate(value: str, limit: int, suffix: str = "") -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + suffix


__all__ = ["mask_secret", "mask_url", "mask_headers", "truncate"]
