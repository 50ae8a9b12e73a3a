"""Error taxonomy and JSON error payload helpers."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence


class PortfolioError(Exception):
    """Base class for errors raised by the portfolio backend."""


class ConfigurationError(PortfolioError):
    """Mandatory configuration is missing; raised before any network call."""


class CandidateFailure(PortfolioError):
    """A single provider attempt that did not produce usable text."""

    def __init__(
        self,
        provider: str,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.message = message
        self.status = status
        self.body = body


class AllProvidersFailed(PortfolioError):
    """Every candidate was tried once and none returned text."""

    def __init__(self, failures: Sequence[CandidateFailure]) -> None:
        self.failures: List[CandidateFailure] = list(failures)
        last = self.last.message if self.last is not None else "no providers configured"
        super().__init__(f"All LLM providers failed. Last error: {last}")

    @property
    def last(self) -> Optional[CandidateFailure]:
        return self.failures[-1] if self.failures else None


def extract_error_details(payload: Any) -> str:
    """Return a readable message from an upstream error body."""
    if isinstance(payload, str):
        text = payload.strip()
        if text.startswith("{"):
            try:
                return extract_error_details(json.loads(text))
            except ValueError:
                pass
        return text

    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict):
            message = err.get("message")
            if isinstance(message, str) and message:
                return message
            return json.dumps(err, ensure_ascii=False)
        if isinstance(err, str) and err:
            return err
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
        return json.dumps(payload, ensure_ascii=False)

    return str(payload)


def error_payload(message: str) -> Dict[str, Any]:
    return {"error": message}


__all__ = [
    "PortfolioError",
    "ConfigurationError",
    "CandidateFailure",
    "AllProvidersFailed",
    "extract_error_details",
    "error_payload",
]
