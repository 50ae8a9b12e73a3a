"""Per-shape request/response translators.

Each request shape maps to a pure pair of functions:
- ``build_request_body(model, prompt, structured)`` -> JSON body
- ``extract_response_text(payload)`` -> text or None

Adding a provider shape means adding a module and one entry in ``_TRANSLATORS``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..config import RequestShape
from . import chat_completions, generate_content


@dataclass(frozen=True)
class ShapeTranslator:
    build_request_body: Callable[[str, str, bool], Dict[str, Any]]
    extract_response_text: Callable[[Any], Optional[str]]


_TRANSLATORS: Dict[RequestShape, ShapeTranslator] = {
    RequestShape.CHAT_COMPLETIONS: ShapeTranslator(
        chat_completions.build_request_body,
        chat_completions.extract_response_text,
    ),
    RequestShape.GENERATE_CONTENT: ShapeTranslator(
        generate_content.build_request_body,
        generate_content.extract_response_text,
    ),
}


def get_translator(shape: RequestShape) -> ShapeTranslator:
    try:
        return _TRANSLATORS[shape]
    except KeyError:
        raise ValueError(f"No translator registered for request shape {shape!r}") from None


__all__ = ["ShapeTranslator", "get_translator"]
