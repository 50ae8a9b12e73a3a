"""Resolve settings into the ordered list of LLM provider candidates."""

from __future__ import annotations

from typing import List, Mapping, Optional
from urllib.parse import urlencode, urlsplit

from . import config
from .auth import resolve_auth_strategy
from .config import ProviderConfig, RequestShape
from .errors import ConfigurationError


PROXY_NAME = "LiteLLM Proxy"
PROXY_DEFAULT_MODEL = "gemini/gemini-2.5-flash"
PROXY_DEFAULT_API_KEY = "sk-1234"
PROXY_PLACEHOLDER = "your-litellm-server"

OFFICIAL_NAME = "Google Official"
OFFICIAL_MODEL = "gemini-2.5-flash"
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com"
GEMINI_API_VERSION = "v1beta"


def _setting(settings: Mapping[str, str], key: str) -> str:
    value = settings.get(key)
    return value.strip() if isinstance(value, str) else ""


def _proxy_base_url(raw: str) -> Optional[str]:
    """Return the usable proxy base URL, or None when it should be skipped."""
    if not raw or PROXY_PLACEHOLDER in raw:
        return None
    try:
        parts = urlsplit(raw)
    except ValueError:
        return None
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        return None
    return raw.rstrip("/")


def _proxy_candidate(settings: Mapping[str, str]) -> Optional[ProviderConfig]:
    base = _proxy_base_url(_setting(settings, config.LITELLM_BASE_URL))
    if base is None:
        return None

    auth = resolve_auth_strategy(
        RequestShape.CHAT_COMPLETIONS,
        _setting(settings, config.LITELLM_API_KEY) or PROXY_DEFAULT_API_KEY,
    )
    headers = {"Content-Type": "application/json"}
    headers.update(auth.headers())
    return ProviderConfig(
        name=PROXY_NAME,
        shape=RequestShape.CHAT_COMPLETIONS,
        endpoint=f"{base}/v1/chat/completions",
        model=_setting(settings, config.LITELLM_MODEL) or PROXY_DEFAULT_MODEL,
        headers=headers,
    )


def _official_candidate(api_key: str) -> ProviderConfig:
    auth = resolve_auth_strategy(RequestShape.GENERATE_CONTENT, api_key)
    url = f"{GEMINI_ENDPOINT}/{GEMINI_API_VERSION}/models/{OFFICIAL_MODEL}:generateContent"
    query = auth.query_params()
    if query:
        url = f"{url}?{urlencode(query)}"

    headers = {"Content-Type": "application/json"}
    headers.update(auth.headers())
    return ProviderConfig(
        name=OFFICIAL_NAME,
        shape=RequestShape.GENERATE_CONTENT,
        endpoint=url,
        model=OFFICIAL_MODEL,
        headers=headers,
    )


def resolve_candidates(settings: Mapping[str, str]) -> List[ProviderConfig]:
    """Build the fallback-ordered provider list from ``settings``.

    The optional LiteLLM proxy comes first when its base URL is usable; the
    official Gemini API is always appended last.

    Raises:
        ConfigurationError: ``GEMINI_API_KEY`` is missing or blank.
    """
    api_key = _setting(settings, config.GEMINI_API_KEY)
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY is missing in environment variables.")

    candidates: List[ProviderConfig] = []
    proxy = _proxy_candidate(settings)
    if proxy is not None:
        candidates.append(proxy)
    candidates.append(_official_candidate(api_key))
    return candidates


__all__ = ["resolve_candidates"]
