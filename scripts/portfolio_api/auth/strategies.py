"""Authentication strategies used when building provider candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..config import RequestShape


@dataclass
class AuthStrategy:
    """Base strategy that returns headers and optional query params."""

    token: Optional[str] = None

    def headers(self) -> Dict[str, str]:
        return {}

    def query_params(self) -> Dict[str, str]:
        return {}


@dataclass
class BearerTokenAuth(AuthStrategy):
    """Attach a bearer token to the Authorization header."""

    header_name: str = "Authorization"
    prefix: str = "Bearer "

    def headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {self.header_name: f"{self.prefix}{self.token}"}


@dataclass
class QueryKeyAuth(AuthStrategy):
    """Send the API key as a query-string parameter (Gemini's ``?key=``)."""

    param_name: str = "key"

    def query_params(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {self.param_name: self.token}


def resolve_auth_strategy(shape: RequestShape, token: Optional[str]) -> AuthStrategy:
    """Return the auth strategy matching a request shape."""
    if shape is RequestShape.CHAT_COMPLETIONS:
        return BearerTokenAuth(token=token)
    if shape is RequestShape.GENERATE_CONTENT:
        return QueryKeyAuth(token=token)
    raise ValueError(f"No auth strategy for request shape: {shape!r}")


__all__ = [
    "AuthStrategy",
    "BearerTokenAuth",
    "QueryKeyAuth",
    "resolve_auth_strategy",
]
