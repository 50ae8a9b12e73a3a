"""Configuration dataclasses and settings loading for the portfolio backend."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


# Settings keys
GEMINI_API_KEY = "GEMINI_API_KEY"
LITELLM_BASE_URL = "LITELLM_BASE_URL"
LITELLM_API_KEY = "LITELLM_API_KEY"
LITELLM_MODEL = "LITELLM_MODEL"
TURNSTILE_SECRET_KEY = "TURNSTILE_SECRET_KEY"
DISCORD_WEBHOOK_URL = "DISCORD_WEBHOOK_URL"
DISCORD_CHAT_WEBHOOK_URL = "DISCORD_CHAT_WEBHOOK_URL"
DISCORD_RESUME_WEBHOOK_URL = "DISCORD_RESUME_WEBHOOK_URL"
REQUEST_TIMEOUT = "REQUEST_TIMEOUT"

SETTING_KEYS = (
    GEMINI_API_KEY,
    LITELLM_BASE_URL,
    LITELLM_API_KEY,
    LITELLM_MODEL,
    TURNSTILE_SECRET_KEY,
    DISCORD_WEBHOOK_URL,
    DISCORD_CHAT_WEBHOOK_URL,
    DISCORD_RESUME_WEBHOOK_URL,
    REQUEST_TIMEOUT,
)

DEFAULT_REQUEST_TIMEOUT = 120.0

# Server / logging
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8788"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RequestShape(str, Enum):
    """Wire format spoken by an LLM endpoint."""

    CHAT_COMPLETIONS = "chat_completions"
    GENERATE_CONTENT = "generate_content"


@dataclass(frozen=True)
class ProviderConfig:
    """One candidate LLM backend, in fallback order."""

    name: str
    shape: RequestShape
    endpoint: str
    model: str
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate headers afterwards.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Snapshot the known settings from the process environment."""
    source = os.environ if environ is None else environ
    return {key: source[key] for key in SETTING_KEYS if source.get(key) is not None}


def request_timeout(settings: Mapping[str, str]) -> float:
    raw = (settings.get(REQUEST_TIMEOUT) or "").strip()
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


__all__ = [
    "RequestShape",
    "ProviderConfig",
    "load_settings",
    "request_timeout",
    "SETTING_KEYS",
]
