"""Authentication helpers exposed for the candidate resolver."""

from .strategies import (
    AuthStrategy,
    BearerTokenAuth,
    QueryKeyAuth,
    resolve_auth_strategy,
)

__all__ = [
    "AuthStrategy",
    "BearerTokenAuth",
    "QueryKeyAuth",
    "resolve_auth_strategy",
]
