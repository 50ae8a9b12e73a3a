"""Runtime toggle for verbose upstream request logging."""

from __future__ import annotations

import logging
import os
from typing import Final


_DEBUG_ENV: Final[str] = "PORTFOLIO_DEBUG"
_DEBUG_ENABLED: bool = os.getenv(_DEBUG_ENV, "0") == "1"


def is_enabled() -> bool:
    """Return True when upstream request dumps are currently allowed."""

    return _DEBUG_ENABLED


def setup_logging(level: str = "INFO") -> None:
    """Set up root logging configuration for the server process."""
    from .config import LOG_DATE_FORMAT, LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


__all__ = ["is_enabled", "setup_logging"]
